import pytest
from unittest.mock import AsyncMock

from core.droid_exec import (
    DROID_EXECUTABLE,
    DROID_TIMEOUT_SECONDS,
    build_arguments,
    execute_droid,
    format_outcome,
)
from core.models import NonZeroExit, ProcessError, Success, ToolInvocationRequest

PREAMBLE = "\x1b[?25l\x1b[2K\x1b[1G\x1b[?25h\x1b[32m✓ done\x1b[0m\n"


def test_build_arguments_prompt_only() -> None:
    args = build_arguments(ToolInvocationRequest(prompt="fix the tests"))
    assert args == ["exec", "--skip-permissions-unsafe", "fix the tests"]


def test_build_arguments_with_model_and_cwd() -> None:
    request = ToolInvocationRequest(cwd="/repo", model="gpt-5.1-codex", prompt="hi")
    assert build_arguments(request) == [
        "exec",
        "--skip-permissions-unsafe",
        "-m",
        "gpt-5.1-codex",
        "--cwd",
        "/repo",
        "hi",
    ]


def test_build_arguments_model_only() -> None:
    args = build_arguments(ToolInvocationRequest(prompt="hi", model="glm-4.6"))
    assert args == ["exec", "--skip-permissions-unsafe", "-m", "glm-4.6", "hi"]


def test_build_arguments_cwd_only() -> None:
    args = build_arguments(ToolInvocationRequest(prompt="hi", cwd="/tmp"))
    assert args == ["exec", "--skip-permissions-unsafe", "--cwd", "/tmp", "hi"]


def test_build_arguments_skips_empty_optional_fields() -> None:
    args = build_arguments(ToolInvocationRequest(prompt="hi", model="", cwd=""))
    assert args == ["exec", "--skip-permissions-unsafe", "hi"]


def test_build_arguments_passes_unknown_model_through() -> None:
    args = build_arguments(ToolInvocationRequest(prompt="hi", model="some-future-model"))
    assert args[2:4] == ["-m", "some-future-model"]


def test_prompt_is_always_last_even_when_it_looks_like_a_flag() -> None:
    args = build_arguments(ToolInvocationRequest(prompt="--help", model="m", cwd="/d"))
    assert args[-1] == "--help"


def test_format_success_returns_stdout() -> None:
    result = format_outcome(Success(stdout="OK"))
    assert result.to_dict() == {"content": [{"type": "text", "text": "OK"}], "isError": False}


def test_format_success_strips_preamble() -> None:
    result = format_outcome(Success(stdout=PREAMBLE + "the answer"))
    assert result.is_error is False
    assert result.text_value == "the answer"


def test_format_non_zero_exit_includes_code_and_both_streams() -> None:
    result = format_outcome(NonZeroExit(code=1, stdout="partial", stderr="bad arg"))
    assert result.is_error is True
    assert len(result.content) == 1
    assert result.text_value == "droid exec failed with code 1\n\nStdout:\npartial\n\nStderr:\nbad arg"


def test_format_non_zero_exit_does_not_sanitize() -> None:
    result = format_outcome(NonZeroExit(code=2, stdout=PREAMBLE, stderr=""))
    assert PREAMBLE in result.text_value


def test_format_process_error() -> None:
    result = format_outcome(ProcessError(message="ENOENT"))
    assert result.is_error is True
    assert result.text_value == "Error executing droid: ENOENT"


def test_format_unknown_outcome_raises() -> None:
    with pytest.raises(TypeError):
        format_outcome("not an outcome")  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_execute_droid_invokes_runner_once() -> None:
    runner = AsyncMock(return_value=Success(stdout="OK"))
    request = ToolInvocationRequest(prompt="hi", model="glm-4.6", cwd="/repo")

    result = await execute_droid(request, runner=runner)

    runner.assert_awaited_once_with(
        DROID_EXECUTABLE,
        ["exec", "--skip-permissions-unsafe", "-m", "glm-4.6", "--cwd", "/repo", "hi"],
        DROID_TIMEOUT_SECONDS,
    )
    assert result.is_error is False
    assert result.text_value == "OK"


def test_timeout_is_five_minutes() -> None:
    assert DROID_EXECUTABLE == "droid"
    assert DROID_TIMEOUT_SECONDS == 300


@pytest.mark.asyncio
async def test_execute_droid_maps_non_zero_exit() -> None:
    runner = AsyncMock(return_value=NonZeroExit(code=1, stdout="partial", stderr="bad arg"))

    result = await execute_droid(ToolInvocationRequest(prompt="hi"), runner=runner)

    assert result.is_error is True
    assert "1" in result.text_value
    assert "partial" in result.text_value
    assert "bad arg" in result.text_value


@pytest.mark.asyncio
async def test_execute_droid_maps_start_failure() -> None:
    runner = AsyncMock(return_value=ProcessError(message="ENOENT"))

    result = await execute_droid(ToolInvocationRequest(prompt="hi"), runner=runner)

    assert result.is_error is True
    assert "ENOENT" in result.text_value


@pytest.mark.asyncio
async def test_execute_droid_never_raises() -> None:
    runner = AsyncMock(side_effect=RuntimeError("boom"))

    result = await execute_droid(ToolInvocationRequest(prompt="hi"), runner=runner)

    assert result.is_error is True
    assert result.text_value == "Error executing droid: boom"
    runner.assert_awaited_once()
