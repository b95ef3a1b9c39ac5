#!/usr/bin/env python3
"""
tt-status - Show status of a Triangle Tube boiler via Modbus

Usually pointed at an RS-485 serial port device, but may also query through
a Modbus/TCP gateway such as mbusd.
"""

import sys
import argparse

from ttstatus import (
    __version__,
    DIALECTS,
    ConfigLoader,
    ModbusConnection,
    TTStatusError,
    get_decoder,
    get_logger,
    print_status,
    setup_logging,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tt-status",
        description="Show status of a Triangle Tube boiler via Modbus RTU or Modbus/TCP"
    )
    parser.add_argument(
        '-d', '--debug',
        action='store_true',
        help='Enable debug output'
    )
    parser.add_argument(
        '-S', '--slave',
        type=int,
        default=None,
        help='Modbus slave ID, default 1'
    )
    parser.add_argument(
        '-s', '--serial',
        help='Serial port device for Modbus/RTU'
    )
    parser.add_argument(
        '-i', '--ip',
        help='IP address for Modbus/TCP'
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=None,
        help='TCP port for Modbus/TCP (optional, default 502)'
    )
    parser.add_argument(
        '-D', '--dialect',
        choices=DIALECTS,
        default=None,
        help='Boiler register map, default bitfield'
    )
    parser.add_argument(
        '-c', '--config',
        help='Path to YAML configuration file',
        default=None
    )
    parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def load_config(args) -> ConfigLoader:
    """Merge the optional config file with command line options."""
    config = ConfigLoader(args.config)
    config.apply_overrides(
        dialect=args.dialect,
        host=args.ip,
        port=args.port,
        serial_port=args.serial,
        slave=args.slave,
        debug=args.debug
    )
    config.validate()
    return config


def main(argv=None) -> int:
    """Main entry point, returns the process exit status"""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(debug=args.debug)

    try:
        config = load_config(args)
        decoder = get_decoder(config.general.dialect)
    except TTStatusError as e:
        get_logger().error(f"Error: {e}")
        parser.print_usage(sys.stderr)
        return 1

    log = setup_logging(
        log_level=config.general.log_level,
        log_file=config.general.log_file or None,
        debug=config.general.debug
    )
    log.debug(f"tt-status v{__version__}, dialect {decoder.name}, "
              f"endpoint {config.modbus.endpoint}")

    connection = ModbusConnection(config.modbus, decoder.serial_params,
                                  debug=config.general.debug)
    try:
        connection.connect()
        status = decoder.decode(connection)
    except TTStatusError as e:
        log.error(f"Error: {e}")
        return 1
    finally:
        connection.close()
        log.debug(f"Modbus stats: {connection.successful_reads} reads, "
                  f"{connection.failed_reads} failures")

    print_status(status)
    return 0


if __name__ == "__main__":
    sys.exit(main())
