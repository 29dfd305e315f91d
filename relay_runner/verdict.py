"""Exit code computation for a finished run."""

from typing import Final, Literal

EXIT_PASSED: Final = 0
EXIT_FAILED: Final = 2
EXIT_INCOMPLETE: Final = 3


def compute_exit_code(
    failed_count: int, auto_fail_reason: str | None
) -> Literal[0, 2, 3]:
    """Return the verdict for a run.

    Failures dominate: 2 if any assertion failed, 3 if none failed but the
    run carries an auto-fail reason, 0 otherwise.
    """
    if failed_count > 0:
        return EXIT_FAILED
    if auto_fail_reason is not None:
        return EXIT_INCOMPLETE
    return EXIT_PASSED
