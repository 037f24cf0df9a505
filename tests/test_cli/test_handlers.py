"""Тесты обработчиков команд: вызовы адаптера и вывод."""

from __future__ import annotations

from typing import Any, List, Union

import click
import pytest
from docker.errors import APIError

from containerctl.cli import handlers
from containerctl.cli.commands import (
    ExecCommand,
    ListCommand,
    LogsCommand,
    PullCommand,
    RunCommand,
    StopCommand,
)
from containerctl.docker_api import containers
from containerctl.docker_api.client import DockerClientWrapper
from containerctl.docker_api.exceptions import DockerOperationError
from containerctl.docker_api.models import ExecDetached


class Recorder:
    """Подменяет click.echo и запоминает всё, что ему передали.

    Байты сохраняются как есть, как их получил бы click.echo.
    """

    def __init__(self) -> None:
        self.lines: List[Union[str, bytes]] = []

    def __call__(self, message: Any = "", nl: bool = True, **kwargs: Any) -> None:
        if isinstance(message, bytes):
            self.lines.append(message + b"\n" if nl else message)
        else:
            self.lines.append(f"{message}\n" if nl else str(message))

    @property
    def data(self) -> bytes:
        return b"".join(
            item if isinstance(item, bytes) else item.encode("utf-8") for item in self.lines
        )


@pytest.fixture
def echo() -> Recorder:
    return Recorder()


def test_list_prints_one_line_per_container(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    fake_api.container_list = [
        {"Id": "abc", "Image": "busybox", "Status": "Up 1 second"},
        {"Id": "def", "Image": "redis:7", "Status": "Created"},
    ]
    handlers.dispatch(ListCommand(), wrapper, echo)
    assert echo.lines == [
        "ID: abc, Image: busybox, Status: Up 1 second\n",
        "ID: def, Image: redis:7, Status: Created\n",
    ]


def test_list_empty_prints_nothing(wrapper: DockerClientWrapper, echo) -> None:
    handlers.dispatch(ListCommand(), wrapper, echo)
    assert echo.lines == []


def test_pull_prints_events_then_completion(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    fake_api.pull_events = [{"status": "Pulling"}, {"status": "Downloading"}, {"status": "Complete"}]
    handlers.dispatch(PullCommand(image="busybox"), wrapper, echo)
    assert echo.lines == [
        "Pulling\n",
        "Downloading\n",
        "Complete\n",
        "Image busybox pulled\n",
    ]


def test_run_creates_then_starts(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    command = RunCommand(image="busybox", envs=["A=B"], volumes=["/h:/c"])
    handlers.dispatch(command, wrapper, echo)
    assert echo.lines == ["Created container c0ffee\n", "Container started: c0ffee\n"]
    assert [call[0] for call in fake_api.calls] == [
        "create_host_config",
        "create_container",
        "start",
    ]
    assert fake_api.called("start") == [(("c0ffee",), {})]


def test_run_rejected_image_never_starts(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    fake_api.errors["create_container"] = APIError(
        "404 Client Error", explanation="No such image: nosuch:latest"
    )
    with pytest.raises(DockerOperationError) as excinfo:
        handlers.dispatch(RunCommand(image="nosuch"), wrapper, echo)
    assert "nosuch" in str(excinfo.value)
    assert echo.lines == []
    assert fake_api.called("start") == []


def test_stop_prints_confirmation(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    handlers.dispatch(StopCommand(container_id="abc"), wrapper, echo)
    assert echo.lines == ["Container stopped: abc\n"]


def test_logs_writes_chunks_verbatim(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    fake_api.log_chunks = [b"first line\nsecond ", b"half\n", b"\xff"]
    handlers.dispatch(LogsCommand(container_id="abc"), wrapper, echo)
    assert echo.lines == [b"first line\nsecond ", b"half\n", b"\xff"]
    (_, kwargs), = fake_api.called("logs")
    assert kwargs["follow"] is False


def test_logs_keeps_multibyte_text_split_across_chunks(
    wrapper: DockerClientWrapper, fake_api, capsysbinary
) -> None:
    text = "Привет, мир\n".encode("utf-8")
    fake_api.log_chunks = [bytes([byte]) for byte in text]
    handlers.dispatch(LogsCommand(container_id="abc"), wrapper, click.echo)
    assert capsysbinary.readouterr().out == text


def test_exec_attached_streams_output(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    fake_api.exec_chunks = [b"hi\n"]
    handlers.dispatch(ExecCommand(container_id="abc", cmd=["echo", "hi"]), wrapper, echo)
    assert echo.data == b"hi\n"
    assert fake_api.exec_output_read is True


def test_exec_output_split_inside_character(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    text = "файл.txt\n".encode("utf-8")
    fake_api.exec_chunks = [text[:1], text[1:3], text[3:]]
    handlers.dispatch(ExecCommand(container_id="abc", cmd=["ls"]), wrapper, echo)
    assert echo.data == text
    assert echo.data.decode("utf-8") == "файл.txt\n"


def test_exec_detached_prints_notice_only(wrapper: DockerClientWrapper, fake_api, echo) -> None:
    fake_api.exec_chunks = [b"must not be read\n"]
    handlers.dispatch(
        ExecCommand(container_id="abc", cmd=["echo", "hi"], detach=True), wrapper, echo
    )
    assert echo.lines == ["Exec exec-1 started in detached mode\n"]
    assert fake_api.exec_output_read is False


def test_exec_runtime_reports_detached(
    wrapper: DockerClientWrapper, fake_api, echo, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(
        containers, "start_exec", lambda client, exec_id, detach=False: ExecDetached(exec_id)
    )
    handlers.dispatch(ExecCommand(container_id="abc", cmd=["echo", "hi"]), wrapper, echo)
    assert echo.lines == ["Exec exec-1 started in detached mode\n"]
    assert fake_api.exec_output_read is False


def test_dispatch_unknown_command(wrapper: DockerClientWrapper, echo) -> None:
    with pytest.raises(TypeError):
        handlers.dispatch(object(), wrapper, echo)  # type: ignore[arg-type]
