# =============================================================================
# core/droid_exec.py  -  The droidExec request handler
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns one validated droidExec request into one `droid exec` run and
#   turns the run's outcome into a ToolResult:
#
#     ToolInvocationRequest
#       -> build_arguments()    exec --skip-permissions-unsafe [-m M] [--cwd D] PROMPT
#       -> run_process()        one subprocess, 5 minute budget
#       -> format_outcome()     ToolResult(text, is_error)
#
#   Schema validation is NOT done here; FastMCP has already rejected
#   malformed requests before execute_droid() is called.
#
# ERROR CONTRACT:
#   execute_droid() never raises.  Every failure becomes a ToolResult with
#   is_error=True, so the MCP client always gets a well-formed answer.
# =============================================================================

import logging
from typing import Awaitable, Callable, Sequence

from core.models import (
    ExecutionOutcome,
    NonZeroExit,
    ProcessError,
    Success,
    ToolInvocationRequest,
    ToolResult,
)
from core.process_runner import run_process
from core.sanitizer import strip_success_preamble

logger = logging.getLogger(__name__)

DROID_EXECUTABLE = "droid"
DROID_TIMEOUT_SECONDS = 5 * 60
BASE_ARGUMENTS = ("exec", "--skip-permissions-unsafe")

Runner = Callable[[str, Sequence[str], float], Awaitable[ExecutionOutcome]]


def build_arguments(request: ToolInvocationRequest) -> list[str]:
    """Build the droid argument list.

    The order is fixed: base flags, then `-m <model>`, then `--cwd <cwd>`,
    then the prompt, which is always last.  Empty model/cwd are skipped.
    """
    args = list(BASE_ARGUMENTS)
    if request.model:
        args.extend(["-m", request.model])
    if request.cwd:
        args.extend(["--cwd", request.cwd])
    args.append(request.prompt)
    return args


def format_outcome(outcome: ExecutionOutcome) -> ToolResult:
    """Map an ExecutionOutcome to the ToolResult returned to the client."""
    if isinstance(outcome, ProcessError):
        return ToolResult.text(f"Error executing {DROID_EXECUTABLE}: {outcome.message}", is_error=True)
    if isinstance(outcome, NonZeroExit):
        return ToolResult.text(
            f"{DROID_EXECUTABLE} exec failed with code {outcome.code}\n\n"
            f"Stdout:\n{outcome.stdout}\n\n"
            f"Stderr:\n{outcome.stderr}",
            is_error=True,
        )
    if isinstance(outcome, Success):
        return ToolResult.text(strip_success_preamble(outcome.stdout))
    raise TypeError(f"Unknown execution outcome: {outcome!r}")


async def execute_droid(request: ToolInvocationRequest, runner: Runner = run_process) -> ToolResult:
    """Run `droid exec` once for `request` and return the ToolResult.

    Args:
        request: The validated tool parameters.
        runner: Process runner, replaceable in tests.

    Returns:
        A ToolResult; is_error is set for start failures and non-zero exits.
    """
    args = build_arguments(request)
    try:
        outcome = await runner(DROID_EXECUTABLE, args, DROID_TIMEOUT_SECONDS)
        return format_outcome(outcome)
    except Exception as e:
        logger.exception("Unexpected failure running %s", DROID_EXECUTABLE)
        return format_outcome(ProcessError(message=str(e)))
