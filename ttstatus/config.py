"""YAML configuration loader for tt-status"""

import os
from dataclasses import dataclass
from typing import Dict, Optional

import yaml

from .exceptions import ConfigError


@dataclass
class ModbusConfig:
    """Modbus connection settings: TCP host/port or a serial device"""
    host: str = ""
    port: int = 502
    serial_port: str = ""
    slave: int = 1
    timeout: float = 3

    @property
    def is_tcp(self) -> bool:
        return bool(self.host)

    @property
    def endpoint(self) -> str:
        if self.is_tcp:
            return f"{self.host}:{self.port}"
        return self.serial_port


@dataclass
class GeneralConfig:
    """General application settings"""
    dialect: str = "bitfield"
    log_level: str = "WARNING"
    log_file: str = ""
    debug: bool = False


class ConfigLoader:
    """
    Optional YAML configuration, overridden by command line options.

    A config file is not required: every setting has a default or can be
    given on the command line. An explicitly named file must exist.
    """

    def __init__(self, config_path: str = None):
        self.config: Dict = {}
        self.config_path: Optional[str] = None
        self.general: GeneralConfig = None
        self.modbus: ModbusConfig = None
        self._load_config(config_path)

    def _load_config(self, config_path: str = None):
        """Load and parse YAML configuration"""
        if config_path and not os.path.exists(config_path):
            raise ConfigError(f"Config file not found: {config_path}")

        paths = [
            config_path,
            os.environ.get('TT_STATUS_CONFIG'),
            'config/tt_status.yaml',
            'tt_status.yaml'
        ]

        for path in filter(None, paths):
            if os.path.exists(path):
                try:
                    with open(path, 'r') as f:
                        self.config = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    raise ConfigError(f"Invalid YAML in {path}: {e}") from e
                self.config_path = path
                break

        if not isinstance(self.config, dict):
            raise ConfigError(f"Config file {self.config_path} must contain a mapping")
        self._parse_config()

    def _parse_config(self):
        """Parse configuration into dataclasses"""
        gen = self.config.get('general') or {}
        self.general = GeneralConfig(
            dialect=gen.get('dialect', 'bitfield'),
            log_level=gen.get('log_level', 'WARNING'),
            log_file=gen.get('log_file', ''),
            debug=bool(gen.get('debug', False))
        )

        mb = self.config.get('modbus') or {}
        try:
            self.modbus = ModbusConfig(
                host=mb.get('host', '') or '',
                port=int(mb.get('port', 502)),
                serial_port=mb.get('serial_port', '') or '',
                slave=int(mb.get('slave', 1)),
                timeout=float(mb.get('timeout', 3))
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid modbus settings: {e}") from e

    def apply_overrides(self, dialect: str = None, host: str = None,
                        port: int = None, serial_port: str = None,
                        slave: int = None, debug: bool = False):
        """Apply command line options on top of file settings"""
        if dialect:
            self.general.dialect = dialect
        if debug:
            self.general.debug = True
        if host:
            self.modbus.host = host
        if port is not None:
            self.modbus.port = port
        if serial_port:
            self.modbus.serial_port = serial_port
        if slave is not None:
            self.modbus.slave = slave

    def validate(self):
        """Check that exactly one transport is configured"""
        if not self.modbus.host and not self.modbus.serial_port:
            raise ConfigError("Must specify either ip address or serial port")
        if self.modbus.host and self.modbus.serial_port:
            raise ConfigError("Must specify only one of ip address or serial port")
        if not 0 <= self.modbus.slave <= 247:
            raise ConfigError(f"Invalid Modbus slave ID: {self.modbus.slave}")
