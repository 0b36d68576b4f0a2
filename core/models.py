# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of every piece of information that
# flows through one droidExec call:
#
#   ToolInvocationRequest  ->  ExecutionOutcome  ->  ToolResult
#   (what the client sent)     (what droid did)      (what the client gets)
#
# They carry no behavior beyond trivial serialization.  All of them are
# frozen: nothing here is mutated after it is created, and nothing outlives
# the call that created it.
# =============================================================================

from dataclasses import dataclass, field
from typing import Optional, Union


# -----------------------------------------------------------------------------
# ToolInvocationRequest - the validated parameters of one droidExec call
# -----------------------------------------------------------------------------
# By the time one of these exists, FastMCP has already validated the raw
# request against the tool schema.  Empty strings for model/cwd are treated
# the same as "not given" when arguments are built.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolInvocationRequest:
    """Parameters for a single `droid exec` run."""

    prompt: str                        # Always the final positional argument
    model: Optional[str] = None        # Passed through to `-m`, never validated
    cwd: Optional[str] = None          # Passed through to `--cwd`


# -----------------------------------------------------------------------------
# ExecutionOutcome - the terminal result of one subprocess run
# -----------------------------------------------------------------------------
# Exactly one of these is produced per run.  Use isinstance() to tell them
# apart.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Success:
    """The process exited with code 0."""

    stdout: str


@dataclass(frozen=True)
class ProcessError:
    """The process could not be started, so there is no exit code."""

    message: str


@dataclass(frozen=True)
class NonZeroExit:
    """The process ran but exited abnormally (including timeout kills)."""

    code: int
    stdout: str
    stderr: str


ExecutionOutcome = Union[Success, ProcessError, NonZeroExit]


# -----------------------------------------------------------------------------
# ToolResult - what the handler hands back to the registry
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TextContent:
    """A single MCP text content block."""

    text: str
    type: str = "text"


@dataclass(frozen=True)
class ToolResult:
    """Protocol-level result of a tool call: one text block plus an error flag."""

    content: list[TextContent] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text_value(self) -> str:
        return "".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        """Wire shape: {"content": [{"type": "text", "text": ...}], "isError": ...}."""
        return {
            "content": [{"type": block.type, "text": block.text} for block in self.content],
            "isError": self.is_error,
        }
