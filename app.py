"""Entry point for padnav

Tools for setting up a gamepad before handing it to an editor:
  probe  show the combinations a connected pad produces and what they trigger
  help   print the help screen for a controls profile
  check  validate a config file and controls profile
"""
import argparse
import logging
import sys
import threading

from config import PadnavConfig, load_config
from core.errors import ConfigError
from core.scheduler import LoopScheduler
from devices.pygame_gamepad import PygameGamepadSource
from help import render_help
from mapper import Mapper, controls_from_profile, group_by_combination, shared_combinations
from monitor import GamepadMonitor
from registry import GamepadShortcutRegistry

LOG = logging.getLogger("padnav")


def load_controls(args):
    """Defaults, then the config's controls, then the profile's."""
    cfg = load_config(args.config) if args.config else PadnavConfig()
    controls = controls_from_profile({"controls": cfg.controls})
    if args.profile:
        mapper = Mapper.load_profile(args.profile)
        controls = controls_from_profile(mapper.profile, base=controls)
    return cfg, controls


def run_probe(cfg, controls, seconds=None) -> int:
    source = PygameGamepadSource(cfg.device)
    if not source.start():
        return 1
    scheduler = LoopScheduler(hz=cfg.device.hz, pre_frame=[source.pump])
    monitor = GamepadMonitor(GamepadShortcutRegistry(), source, scheduler, cfg.monitor)

    bound = group_by_combination(controls)
    last = {}

    def frame(timestamp):
        for iid, state in source.get_gamepads().items():
            combination = monitor.current_combination(state)
            key = combination.serialize()
            if key == last.get(iid):
                continue
            last[iid] = key
            if key:
                LOG.info("gamepad %s: %s -> %s", iid, combination.display_text(),
                         ", ".join(bound.get(key, [])) or "(unbound)")
        scheduler.request_frame(frame)

    source.subscribe(lambda iid: LOG.info("gamepad %s connected", iid),
                     lambda iid: LOG.info("gamepad %s disconnected", iid))
    scheduler.request_frame(frame)
    if seconds:
        timer = threading.Timer(seconds, scheduler.stop)
        timer.daemon = True
        timer.start()

    try:
        LOG.info("probing gamepads at %d Hz; press Ctrl+C to stop", cfg.device.hz)
        scheduler.run()
    except KeyboardInterrupt:
        LOG.info("shutdown requested")
    finally:
        source.stop()
    return 0


def run_check(args) -> int:
    try:
        cfg, controls = load_controls(args)
    except (ConfigError, OSError) as e:
        LOG.error("invalid configuration: %s", e)
        return 1
    for combo, names in shared_combinations(controls).items():
        LOG.info("%s is shared by %s", combo, ", ".join(names))
    print(f"OK: {len(controls)} shortcuts bound, monitor delay "
          f"{cfg.monitor.delay_between_combinations_ms} ms, threshold {cfg.monitor.axis_activation_threshold}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="padnav: drive a block editor with a gamepad")
    parser.add_argument("command", choices=["probe", "help", "check"])
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--profile", help="YAML controls profile")
    parser.add_argument("--seconds", type=float, default=None, help="stop probing after this long")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: INFO)")
    parser.add_argument("--log-format", default="%(levelname)s:%(name)s:%(message)s",
                        help="Logging format string (default: %(levelname)s:%(name)s:%(message)s)")
    parser.add_argument("--debug-modules", nargs="*", default=[],
                        help="Modules to set to DEBUG level (e.g., 'monitor', 'registry', 'gamepad')")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format=args.log_format)

    module_map = {
        "monitor": "padnav.monitor",
        "registry": "padnav.registry",
        "navigation": "padnav.navigation",
        "gamepad": "padnav.gamepad",
        "mapper": "padnav.mapper",
    }
    for module in args.debug_modules:
        logger_name = module_map.get(module, f"padnav.{module}")
        logging.getLogger(logger_name).setLevel(logging.DEBUG)

    if args.command == "check":
        return run_check(args)

    try:
        cfg, controls = load_controls(args)
    except (ConfigError, OSError) as e:
        LOG.error("invalid configuration: %s", e)
        return 1

    if args.command == "help":
        sys.stdout.write(render_help(controls))
        return 0
    return run_probe(cfg, controls, seconds=args.seconds)


if __name__ == "__main__":
    sys.exit(main())
