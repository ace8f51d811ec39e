"""
Evade Logging

Per-module leveled logging plus structured record sinks for session data.

Usage:
    from evade.logging import get_logger

    log = get_logger('engine')
    log.debug("Entering state %s", state)
    log.info("Game started")

    # Structured records (one JSON object per finished game, etc.)
    from evade.logging import emit_record
    emit_record('session', {'type': 'game_over', 'elapsed': 42.5})

Configuration:
    Environment variables:
        EVADE_LOG_LEVEL=DEBUG            # Global default level
        EVADE_LOG_ENGINE=DEBUG           # Module-specific level
        EVADE_LOG_DIR=/tmp/evade-logs    # Where FileSink writes

        # Module-specific structured logging
        EVADE_LOGGING_SESSION_ENABLED=true

    Or programmatically:
        from evade.logging import configure_logging
        configure_logging(level='DEBUG', modules={'barrier': 'TRACE'})
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""
    TRACE = 5      # Per-tick detail
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100      # Disable logging


# =============================================================================
# Sink-Based Structured Logging
# =============================================================================

class LogSink(ABC):
    """
    Abstract base class for log record sinks.

    Sinks receive structured log records and write them to their destination.
    """

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """
        Emit a structured log record.

        Args:
            module: Module name (e.g., 'session')
            record: Structured data to log (must be JSON-serializable)
        """

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""


class FileSink(LogSink):
    """
    Writes structured log records to JSONL files.

    Each module gets its own file in the log directory, one JSON object
    per line.

    Args:
        log_dir: Directory for log files (default: from get_log_dir())
        session_name: Identifier used in file names (default: timestamp)
    """

    def __init__(
        self,
        log_dir: Optional[str] = None,
        session_name: Optional[str] = None,
    ):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, Any] = {}

    def _ensure_dir(self) -> Path:
        """Lazily initialize log directory."""
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        self._log_dir.mkdir(parents=True, exist_ok=True)
        return self._log_dir

    def _get_file(self, module: str):
        """Get or create file handle for module."""
        if module not in self._files:
            path = self._ensure_dir() / f"{self._session_name}_{module}.jsonl"
            self._files[module] = open(path, 'a')
            header = {
                "type": "header",
                "module": module,
                "session_name": self._session_name,
                "start_time": time.time(),
            }
            self._files[module].write(json.dumps(header) + "\n")
        return self._files[module]

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write record to module's JSONL file."""
        f = self._get_file(module)
        if 'wall_time' not in record:
            record = {'wall_time': time.time(), **record}
        f.write(json.dumps(record) + "\n")

    def close(self) -> None:
        for module, f in self._files.items():
            footer = {"type": "footer", "module": module, "end_time": time.time()}
            f.write(json.dumps(footer) + "\n")
            f.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Get paths to all open log files."""
        log_dir = self._ensure_dir()
        return {
            module: log_dir / f"{self._session_name}_{module}.jsonl"
            for module in self._files
        }


class NullSink(LogSink):
    """No-op sink when structured logging is disabled."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass


# Sink registry - active sinks by module
_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Register a sink for a specific module."""
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    """Get the sink registered for a module."""
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Emit a structured log record to the module's sink.

    Returns:
        True if record was emitted, False if no sink is registered
    """
    sink = get_sink(module)
    if sink:
        sink.emit(module, record)
        return True
    return False


def close_all_sinks() -> None:
    """Close and unregister all sinks."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink(module: str, session_name: Optional[str] = None) -> LogSink:
    """
    Create the sink configured for a module.

    Returns a FileSink when EVADE_LOGGING_<MODULE>_ENABLED is set,
    otherwise a NullSink.
    """
    if not get_module_config(module).get('enabled', False):
        return NullSink()
    return FileSink(session_name=session_name)


# =============================================================================
# Global configuration
# =============================================================================

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},
}


def get_log_dir() -> str:
    """Get the log directory.

    Priority:
    1. Configured log_dir
    2. EVADE_LOG_DIR environment variable
    3. Platform user data directory + /logs
    """
    if _config.get('log_dir'):
        return str(Path(_config['log_dir']).expanduser())

    env_dir = os.environ.get('EVADE_LOG_DIR')
    if env_dir:
        return str(Path(env_dir).expanduser())

    return str(Path(get_data_dir()) / 'logs')


def get_data_dir() -> str:
    """Get the per-user data directory.

    EVADE_DATA_DIR wins; otherwise:
       - macOS: ~/Library/Application Support/Evade
       - Windows: %APPDATA%/Evade
       - Linux: $XDG_DATA_HOME/evade (~/.local/share/evade)
    """
    env_dir = os.environ.get('EVADE_DATA_DIR')
    if env_dir:
        return str(Path(env_dir).expanduser())

    if sys.platform == 'darwin':
        return str(Path.home() / 'Library' / 'Application Support' / 'Evade')
    if sys.platform == 'win32':
        return str(Path(os.environ.get('APPDATA', str(Path.home()))) / 'Evade')
    xdg_data = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return str(Path(xdg_data) / 'evade')


def get_module_config(module: str) -> Dict[str, Any]:
    """Get structured-logging settings for a module.

    EVADE_LOGGING_SESSION_ENABLED=true maps to {'enabled': True}
    under module 'session'.
    """
    return _config.get('modules', {}).get(module.lower(), {})


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    """Set a value in a nested dict, creating intermediate dicts as needed."""
    for key in keys[:-1]:
        d = d.setdefault(key, {})
    d[keys[-1]] = value


def _parse_env_value(value: str) -> Any:
    """Parse environment variable value to appropriate type."""
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _format_message(module: str, level: str, msg: str) -> str:
    return f"[{module}] {level}: {msg}"


def _level_from_string(level_str: str) -> LogLevel:
    """Convert string to LogLevel (unknown names fall back to INFO)."""
    mapping = {
        'TRACE': LogLevel.TRACE,
        'DEBUG': LogLevel.DEBUG,
        'INFO': LogLevel.INFO,
        'WARNING': LogLevel.WARNING,
        'WARN': LogLevel.WARNING,
        'ERROR': LogLevel.ERROR,
        'CRITICAL': LogLevel.CRITICAL,
        'OFF': LogLevel.OFF,
    }
    return mapping.get(level_str.upper(), LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Default log level for all modules
        modules: Dict of module_name -> level for per-module configuration
        log_dir: Override directory for FileSink output
    """
    _config['default_level'] = _level_from_string(level)

    if modules:
        for mod, mod_level in modules.items():
            _config['module_levels'][mod.lower()] = _level_from_string(mod_level)

    if log_dir:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    """Load configuration from environment variables.

    Supports two prefixes:
    - EVADE_LOG_*: Log levels (EVADE_LOG_ENGINE=DEBUG)
    - EVADE_LOGGING_*: Module settings (EVADE_LOGGING_SESSION_ENABLED=true)
    """
    if 'EVADE_LOG_LEVEL' in os.environ:
        _config['default_level'] = _level_from_string(os.environ['EVADE_LOG_LEVEL'])

    if 'EVADE_LOG_DIR' in os.environ:
        _config['log_dir'] = os.environ['EVADE_LOG_DIR']

    reserved = ('EVADE_LOG_LEVEL', 'EVADE_LOG_DIR')
    for key, value in os.environ.items():
        if key.startswith('EVADE_LOG_') and key not in reserved:
            module_name = key[len('EVADE_LOG_'):].lower()
            _config['module_levels'][module_name] = _level_from_string(value)

    for key, value in os.environ.items():
        if key.startswith('EVADE_LOGGING_'):
            parts = key[len('EVADE_LOGGING_'):].lower().split('_')
            if len(parts) >= 2:
                module = parts[0]
                _config['modules'].setdefault(module, {})
                _set_nested(_config['modules'][module], parts[1:], _parse_env_value(value))


# Load env config on import
_load_env_config()


class EvadeLogger:
    """Logger for a specific module."""

    def __init__(self, module: str):
        self.module = module
        self._module_key = module.lower().replace('.', '_').replace('/', '_')

    @property
    def level(self) -> LogLevel:
        """Get effective log level for this module."""
        if self._module_key in _config['module_levels']:
            return _config['module_levels'][self._module_key]
        return _config['default_level']

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, level_name: str, msg: str, *args) -> None:
        if not self.is_enabled_for(level):
            return

        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"

        print(_format_message(self.module, level_name, msg))

    def trace(self, msg: str, *args) -> None:
        """Log at TRACE level (per-tick detail)."""
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, 'CRIT', msg, *args)

    def exception(self, msg: str, *args, exc_info: bool = True) -> None:
        """
        Log an error with the current exception's traceback.

        Args:
            msg: Message describing what failed
            exc_info: If True, include current exception traceback
        """
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)

        if exc_info:
            tb = traceback.format_exc()
            if tb and tb.strip() != 'NoneType: None':
                for line in tb.strip().split('\n'):
                    self._log(LogLevel.ERROR, 'TRACE', line)


@lru_cache(maxsize=64)
def get_logger(module: str) -> EvadeLogger:
    """
    Get a logger for the specified module.

    Loggers are cached, so calling get_logger('foo') multiple times
    returns the same logger instance.
    """
    return EvadeLogger(module)
