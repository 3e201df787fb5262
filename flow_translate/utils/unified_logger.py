"""
Unified logging system for flow-translate
Provides consistent logging across the CLI and the translation core
"""
import sys
import os
from datetime import datetime
from typing import Optional, Dict, Any
from enum import Enum


class LogLevel(Enum):
    """Log levels with priority values"""
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class LogType(Enum):
    """Types of log messages for special handling"""
    GENERAL = "general"
    PROVIDER_REQUEST = "provider_request"
    PROVIDER_RESPONSE = "provider_response"
    SECTION_INFO = "section_info"
    FILE_OPERATION = "file_operation"
    TRANSLATION_START = "translation_start"
    TRANSLATION_END = "translation_end"
    ERROR_DETAIL = "error_detail"


class Colors:
    """ANSI color codes for terminal output"""
    NO_COLOR = os.environ.get('NO_COLOR') is not None or not sys.stdout.isatty()

    YELLOW = '' if NO_COLOR else '\033[93m'
    WHITE = '' if NO_COLOR else '\033[97m'
    GRAY = '' if NO_COLOR else '\033[90m'
    ORANGE = '' if NO_COLOR else '\033[38;5;214m'
    GREEN = '' if NO_COLOR else '\033[92m'
    RED = '' if NO_COLOR else '\033[91m'
    ENDC = '' if NO_COLOR else '\033[0m'

    @classmethod
    def disable(cls):
        """Disable all colors"""
        cls.YELLOW = cls.WHITE = cls.GRAY = cls.ORANGE = cls.GREEN = cls.RED = cls.ENDC = ''


class UnifiedLogger:
    """
    Unified logger that provides consistent logging across all interfaces
    """

    def __init__(self,
                 name: str = "flow-translate",
                 console_output: bool = True,
                 enable_colors: bool = True,
                 min_level: LogLevel = LogLevel.INFO):
        """
        Initialize the unified logger

        Args:
            name: Logger name/identifier
            console_output: Whether to output to console
            enable_colors: Whether to use colored output
            min_level: Minimum log level to display
        """
        self.name = name
        self.console_output = console_output
        self.enable_colors = enable_colors
        self.min_level = min_level

        self.translation_state = {
            'provider': '',
            'model': '',
            'target_lang': '',
            'start_time': None,
            'in_progress': False
        }

        if not enable_colors:
            Colors.disable()

    def _format_timestamp(self) -> str:
        """Format current timestamp"""
        return datetime.now().strftime("%H:%M:%S")

    def _format_console_message(self, level: LogLevel, message: str,
                                log_type: LogType = LogType.GENERAL,
                                data: Optional[Dict[str, Any]] = None) -> str:
        """Format message for console output"""
        timestamp = self._format_timestamp()

        level_colors = {
            LogLevel.DEBUG: Colors.GRAY,
            LogLevel.INFO: Colors.WHITE,
            LogLevel.WARNING: Colors.YELLOW,
            LogLevel.ERROR: Colors.RED
        }
        color = level_colors.get(level, Colors.WHITE)

        if log_type == LogType.PROVIDER_REQUEST:
            return self._format_provider_request(data or {})
        elif log_type == LogType.PROVIDER_RESPONSE:
            return self._format_provider_response(data or {})
        elif log_type == LogType.TRANSLATION_START:
            return self._format_translation_start(message, data or {})
        elif log_type == LogType.TRANSLATION_END:
            return self._format_translation_end(message, data or {})
        elif log_type == LogType.ERROR_DETAIL:
            return self._format_error_detail(message, data or {})
        else:
            level_str = f"[{level.name}]" if level != LogLevel.INFO else ""
            return f"{color}[{timestamp}] {level_str} {message}{Colors.ENDC}"

    def _format_provider_request(self, data: Dict[str, Any]) -> str:
        """Format an outgoing provider request summary"""
        timestamp = self._format_timestamp()
        output = [f"{Colors.ORANGE}[{timestamp}] SENDING TO {data.get('provider', 'PROVIDER').upper()}{Colors.ENDC}"]
        if 'model' in data:
            output.append(f"{Colors.GRAY}Model: {data['model']}{Colors.ENDC}")
        if 'chars' in data:
            output.append(f"{Colors.GRAY}Characters: {data['chars']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_provider_response(self, data: Dict[str, Any]) -> str:
        """Format a provider response summary"""
        timestamp = self._format_timestamp()
        output = [f"{Colors.GREEN}[{timestamp}] PROVIDER RESPONSE{Colors.ENDC}"]
        if 'execution_time' in data:
            output.append(f"{Colors.GRAY}Execution time: {data['execution_time']:.2f} seconds{Colors.ENDC}")
        # Full response only in debug mode
        if self.min_level == LogLevel.DEBUG and 'response' in data:
            output.append(f"{Colors.GREEN}{data['response']}{Colors.ENDC}")
        return '\n'.join(output)

        bar_length = 30
        filled = int(bar_length * percentage / 100)
        bar = '█' * filled + '░' * (bar_length - filled)
        section = data.get('current_section', '')
        return f"{Colors.WHITE}[{bar}] {current}/{total} sections ({percentage:.1f}%) {section}{Colors.ENDC}"

    def _format_translation_start(self, message: str, data: Dict[str, Any]) -> str:
        """Format translation start message"""
        self.translation_state.update({
            'provider': data.get('provider', 'Unknown'),
            'model': data.get('model', 'Unknown'),
            'target_lang': data.get('target_lang') or 'default',
            'start_time': datetime.now(),
            'in_progress': True
        })

        output = [f"{Colors.YELLOW}TRANSLATION STARTED{Colors.ENDC}"]
        if 'input_file' in data:
            output.append(f"{Colors.WHITE}Input: {data['input_file']}{Colors.ENDC}")
        output.append(f"{Colors.WHITE}Target language: {self.translation_state['target_lang']}{Colors.ENDC}")
        output.append(f"{Colors.GRAY}Provider: {self.translation_state['provider']} / "
                      f"Model: {self.translation_state['model']}{Colors.ENDC}")
        return '\n'.join(output)

    def _format_translation_end(self, message: str, data: Dict[str, Any]) -> str:
        """Format translation end message"""
        output = [f"\n{Colors.WHITE}TRANSLATION COMPLETE{Colors.ENDC}"]

        if self.translation_state['start_time']:
            duration = datetime.now() - self.translation_state['start_time']
            output.append(f"{Colors.GRAY}Duration: {duration}{Colors.ENDC}")

        if 'output_file' in data:
            output.append(f"{Colors.WHITE}Output saved to: {data['output_file']}{Colors.ENDC}")

        if 'stats' in data:
            stats = data['stats']
            output.append(f"{Colors.WHITE}Translated sections: {stats.get('successful', 0)}{Colors.ENDC}")
            if stats.get('failed', 0) > 0:
                output.append(f"{Colors.YELLOW}Failed sections: {stats['failed']}{Colors.ENDC}")

        self.translation_state['in_progress'] = False
        return '\n'.join(output)

    def _format_error_detail(self, message: str, data: Dict[str, Any]) -> str:
        """Format detailed error message"""
        timestamp = self._format_timestamp()
        output = [f"{Colors.RED}[{timestamp}] ERROR: {message}{Colors.ENDC}"]
        if 'code' in data:
            output.append(f"{Colors.RED}Code: {data['code']}{Colors.ENDC}")
        if 'details' in data:
            output.append(f"{Colors.RED}Details: {data['details']}{Colors.ENDC}")
        if 'section' in data:
            output.append(f"{Colors.RED}Section: {data['section']}{Colors.ENDC}")
        return '\n'.join(output)

    def log(self, level: LogLevel, message: str,
            log_type: LogType = LogType.GENERAL,
            data: Optional[Dict[str, Any]] = None):
        """
        Main logging method

        Args:
            level: Log level
            message: Log message
            log_type: Type of log for special formatting
            data: Additional data for the log entry
        """
        if level.value < self.min_level.value:
            return

        if self.console_output:
            try:
                console_msg = self._format_console_message(level, message, log_type, data)
                if console_msg:
                    print(console_msg, flush=True)
            except UnicodeEncodeError:
                # Windows consoles (cp1252) cannot print every character
                safe_message = message.encode('ascii', 'replace').decode('ascii')
                print(f"[{self._format_timestamp()}] {safe_message}", flush=True)

    # Convenience methods
    def debug(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.DEBUG, message, log_type, data)

    def info(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.INFO, message, log_type, data)

    def warning(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.WARNING, message, log_type, data)

    def error(self, message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
        self.log(LogLevel.ERROR, message, log_type, data)


# Global logger instance
_global_logger = None


def get_logger(name: str = "flow-translate", **kwargs) -> UnifiedLogger:
    """
    Get or create the global logger instance

    Args:
        name: Logger name
        **kwargs: Additional arguments for UnifiedLogger

    Returns:
        UnifiedLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = UnifiedLogger(name, **kwargs)
    else:
        if 'min_level' in kwargs:
            _global_logger.min_level = kwargs['min_level']
    return _global_logger


def setup_cli_logger(enable_colors: bool = True) -> UnifiedLogger:
    """Setup logger for CLI usage"""
    from flow_translate.config import DEBUG_MODE

    if not enable_colors:
        Colors.disable()
    return get_logger(
        console_output=True,
        enable_colors=enable_colors,
        min_level=LogLevel.DEBUG if DEBUG_MODE else LogLevel.INFO
    )


# === Module-level convenience functions ===

def log(level: LogLevel, message: str,
        log_type: LogType = LogType.GENERAL,
        data: Optional[Dict[str, Any]] = None):
    """
    Module-level logging function using the global logger.

    Args:
        level: Log level
        message: Log message
        log_type: Type of log for special formatting
        data: Additional data for the log entry
    """
    get_logger().log(level, message, log_type, data)


def debug(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log debug message using global logger."""
    log(LogLevel.DEBUG, message, log_type, data)


def info(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log info message using global logger."""
    log(LogLevel.INFO, message, log_type, data)


def warning(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log warning message using global logger."""
    log(LogLevel.WARNING, message, log_type, data)


def error(message: str, log_type: LogType = LogType.GENERAL, data: Optional[Dict[str, Any]] = None):
    """Log error message using global logger."""
    log(LogLevel.ERROR, message, log_type, data)
