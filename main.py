#!/usr/bin/env python
"""
Creational Patterns Demo - Main Entry Point
Runs the singleton configuration store, report builder and order prototype demos in sequence.
"""
import sys
import logging
import argparse
import threading
import traceback
from pathlib import Path
from datetime import datetime
from typing import List

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

from modules.config_manager import ConfigurationManager, get_configuration_manager
from modules.logging_config import LoggingConfigurator
from modules.reporting_engine import ReportingEngine, ReportFormat
from modules.order_prototype import Product, Discount, Order
from utils.exceptions import PatternsDemoException, ConfigurationError, ConfigNotFound
from utils import constants


def positive_int(value: str) -> int:
    """argparse type: integer >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def parse_arguments(argv=None):
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Creational Patterns Demo - Singleton, Builder, Prototype",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("--config", type=str, default=constants.DEFAULT_CONFIG_FILE,
                        help="Path to the key=value configuration file")
    parser.add_argument("--saved-config", type=str, default=constants.DEFAULT_SAVED_CONFIG_FILE,
                        help="Where to save the configuration after the demo updates it")
    parser.add_argument("--output-dir", type=str, default=constants.DEFAULT_RESULTS_DIR,
                        help="Directory for rendered report files")
    parser.add_argument("--threads", type=positive_int, default=constants.DEFAULT_THREAD_COUNT,
                        help="Number of threads racing for the configuration store")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable verbose (DEBUG) logging")
    return parser.parse_args(argv)


def bootstrap_logging(verbose: bool) -> None:
    """Console logging until the store's own log.* settings are applied."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=constants.BOOTSTRAP_LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def print_banner(title: str):
    print("\n" + "=" * 5 + f" {title} " + "=" * 5)


def collect_instances_concurrently(n_threads: int) -> List[ConfigurationManager]:
    """
    Start ``n_threads`` threads that request the shared store at the same moment.

    Returns:
        The handle each thread received.
    """
    barrier = threading.Barrier(n_threads)
    refs: List[ConfigurationManager] = []
    refs_lock = threading.Lock()

    def worker():
        barrier.wait()
        cm = get_configuration_manager()
        with refs_lock:
            refs.append(cm)

    threads = [threading.Thread(target=worker, name=f"config-probe-{i}") for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return refs


def run_singleton_phase(args) -> ConfigurationManager:
    """
    Race the threads on first access, then load the winning store.

    Returns:
        The shared store, for the composition root to pass on.
    """
    print_banner("SINGLETON TEST")

    refs = collect_instances_concurrently(args.threads)
    all_same = bool(refs) and all(ref is refs[0] for ref in refs)
    print(f"Single instance across threads: {all_same}")

    cm = get_configuration_manager()
    try:
        cm.load_once(args.config)
        cm.load_once(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
    return cm


def run_config_update_phase(cm: ConfigurationManager, args, logger: logging.Logger) -> None:
    cm.set(constants.LAST_RUN_KEY, datetime.now().isoformat(timespec='seconds'))
    cm.dump_all()

    try:
        cm.save(args.saved_config)
        print(f"Saved to: {args.saved_config}")
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        logger.error(str(e))

    try:
        print(f"{constants.UNKNOWN_KEY} = {cm.get(constants.UNKNOWN_KEY)}")
    except ConfigNotFound as e:
        print(f"Expected error: {e}")

    result = cm.lookup(constants.UNKNOWN_KEY)
    logger.info(f"Lookup {result.key!r}: {result.kind.value}")


def run_builder_phase(config: dict, logger: logging.Logger) -> None:
    print_banner("BUILDER TEST")

    engine = ReportingEngine(config, logger)
    print(engine.render(ReportFormat.TEXT,
                        "Sales Report",
                        "Sales grew by 15% over the month.",
                        "End of report"))
    print(engine.render(ReportFormat.HTML,
                        "HTML Report",
                        "This is an HTML report with <tags> & symbols.",
                        "Footer"))

    engine.execute("Sales Report", "Sales grew by 15% over the month.", "End of report")


def run_prototype_phase(logger: logging.Logger) -> None:
    print_banner("PROTOTYPE TEST")

    prototype = Order(500, "CARD")
    prototype.add_product(Product("Laptop", 250000, 1))
    prototype.add_product(Product("Mouse", 5000, 1))
    prototype.add_discount(Discount("WelcomeDiscount", 3000))
    print(f"Prototype: {prototype}")

    order2 = prototype.duplicate()
    order2.set_payment_method("CASH")
    order2.set_delivery_cost(800)
    order2.product(1).set_quantity(2)
    order2.add_discount(Discount("Promo", 2000))

    print(f"Order2 (duplicate+changes): {order2}")
    print(f"Prototype (unchanged): {prototype}")
    logger.info(f"Prototype total {prototype.total()}, duplicate total {order2.total()}")


def main(argv=None):
    """
    Main demo orchestration function.

    Returns:
        int: Exit code (0 for success, 1 for errors)
    """
    logger = None

    try:
        args = parse_arguments(argv)

        bootstrap_logging(args.verbose)

        # Composition root: the store created by the race is passed on explicitly
        cm = run_singleton_phase(args)

        settings = cm.snapshot()
        if args.verbose:
            settings[constants.LOG_LEVEL_KEY] = 'DEBUG'
        logging_configurator = LoggingConfigurator(settings)
        logging_configurator.setup()
        logger = logging_configurator.get_logger('demo')
        logger.info(f"Configuration loaded: {cm.loaded} (source: {args.config})")

        run_config_update_phase(cm, args, logger)
        run_builder_phase({'outputs': {'base_results_dir': args.output_dir}}, logger)
        run_prototype_phase(logger)

        logger.info("Demo completed successfully")
        return 0

    except PatternsDemoException as e:
        msg = f"Demo Error: {str(e)}"
        print(f"\n[ERROR] {msg}")
        if logger:
            logger.critical(msg, exc_info=True)
        else:
            traceback.print_exc()
        return 1

    except KeyboardInterrupt:
        print("\n[INTERRUPTED] Demo interrupted by user.")
        if logger:
            logger.warning("Demo interrupted by user (Ctrl+C)")
        return 130

    except Exception as e:
        msg = f"Unexpected Error: {str(e)}"
        print(f"\n[CRITICAL] {msg}")
        if logger:
            logger.critical(msg, exc_info=True)
        else:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
