import functools
import logging
import os

from core.errors import ConversionError, SourceFileNotFoundError, UnknownFlavorError, ValidationError

logger = logging.getLogger(__name__)


def validate_path_within_base(base_dir: str, target_path: str) -> str:
    """Validate that a target path is within the base directory (security check)."""
    abs_base = os.path.abspath(base_dir)
    abs_target = os.path.abspath(os.path.normpath(os.path.join(base_dir, target_path)))

    if not abs_target.startswith(abs_base + os.sep) and abs_target != abs_base:
        raise ValidationError(f"Path '{target_path}' resolves outside base directory")

    return abs_target


def validate_heading_shift(value: int, param_name: str = "heading_shift") -> int:
    """Validate a heading shift. Any integer is accepted; levels pushed past 6 render as text, below 1 are dropped."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{param_name} must be an integer")

    return value


def validate_markdown(markdown: str, param_name: str = "markdown") -> str:
    """Validate that Markdown input is a string (empty documents are allowed)."""
    if not isinstance(markdown, str):
        raise ValidationError(f"{param_name} must be a string")

    return markdown


def handle_conversion_errors(tool_name: str):
    """
    A decorator to handle conversion failures in MCP tools in a standardized way.

    Input problems are logged as warnings and re-raised untouched so the client
    sees the validation message. I/O failures and unexpected exceptions are
    logged and wrapped in a ConversionError with a user-friendly message.
    An UnknownFlavorError is a caller defect and propagates unwrapped.

    Args:
        tool_name (str): The name of the tool being decorated (e.g., 'markdown_to_jira').
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (ValidationError, SourceFileNotFoundError) as e:
                logger.warning(f"Input error in {tool_name}: {e}")
                raise
            except UnknownFlavorError:
                raise
            except OSError as e:
                logger.error(f"I/O error in {tool_name}: {e}")
                raise ConversionError(f"I/O error in {tool_name}: {e}", details=e) from e
            except Exception as e:
                message = f"An unexpected error occurred in {tool_name}: {e}"
                logger.exception(message)
                raise ConversionError(message, details=e) from e

        return wrapper

    return decorator
