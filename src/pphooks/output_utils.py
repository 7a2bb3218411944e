"""Exit status constants and error rendering for the hook entry points.

The pre-commit machinery only reads the exit status: 0 lets the commit
through, anything else blocks it.
"""

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def format_precondition_error(error: Exception) -> str:
    """Render a precondition failure (missing tool, broken bundle) for the terminal."""
    from .exceptions import PPHooksError

    if isinstance(error, PPHooksError):
        return error.get_user_message()
    return f"Error: {error}"
