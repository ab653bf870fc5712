"""
External Generator Clients
==========================
The maze itself is produced by an external program. This module holds the
request/response contract with it and the two transports the application
knows how to use.

Why is this file needed?
------------------------
1. Contract: the controller only sees `MazeGenerator.generate()`, which either
   returns a `GeneratorResponse` (ok body or error detail reported by the
   generator) or raises `TransportFailure` when the generator could not be
   reached at all.
2. Bounded latency: every call takes a timeout and a cancellation token, since
   the external program is a black box that may hang.

Classes:
    SubprocessGenerator: Runs a local command, e.g. `java MazeBuilder W H`.
    HttpGenerator: POSTs width/height as form fields to a maze endpoint.
"""
from __future__ import annotations

import logging
import subprocess
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import requests

from mazebuilder.exceptions import GeneratorCancelled, GeneratorTimeout, TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0
EMPTY_OUTPUT_DETAIL = "null output returned from generator"
DEFAULT_COMMAND = ("java", "-Xmx512M", "MazeBuilder", "{width}", "{height}")


class ResponseStatus(Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class GeneratorResponse:
    status: ResponseStatus
    body: str = ""
    detail: str = ""

    @classmethod
    def ok(cls, body: str) -> GeneratorResponse:
        return cls(ResponseStatus.OK, body=body)

    @classmethod
    def error(cls, detail: str) -> GeneratorResponse:
        return cls(ResponseStatus.ERROR, detail=detail)

    @property
    def is_ok(self) -> bool:
        return self.status is ResponseStatus.OK


class MazeGenerator(ABC):
    """Anything that turns (width, height) into maze text."""

    @abstractmethod
    def generate(
        self,
        width: int,
        height: int,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        cancel_event: Optional[threading.Event] = None,
    ) -> GeneratorResponse:
        """
        Requests one maze.

        Raises:
            GeneratorTimeout: no answer within `timeout_s`.
            GeneratorCancelled: `cancel_event` was set before an answer arrived.
            TransportFailure: the generator could not be reached.
        """

    def describe(self) -> str:
        return self.__class__.__name__


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise GeneratorCancelled()


class SubprocessGenerator(MazeGenerator):
    """
    Runs the generator as a child process and reads the maze from stdout.

    `command` is an argv template; the placeholders "{width}" and "{height}"
    are substituted in every argument. A non-zero exit status is reported by
    the generator itself (bad arguments etc.), so it becomes an error
    response carrying what the process wrote to stderr rather than a
    transport failure. Only stdout is maze text.
    """

    def __init__(self, command: Sequence[str] = DEFAULT_COMMAND, poll_interval_s: float = 0.1) -> None:
        if not command:
            raise ValueError("Generator command must not be empty.")
        self.command = tuple(command)
        self.poll_interval_s = poll_interval_s

    def build_argv(self, width: int, height: int) -> list[str]:
        return [
            arg.replace("{width}", str(width)).replace("{height}", str(height))
            for arg in self.command
        ]

    def describe(self) -> str:
        return " ".join(self.command)

    def generate(
        self,
        width: int,
        height: int,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        cancel_event: Optional[threading.Event] = None,
    ) -> GeneratorResponse:
        _check_cancelled(cancel_event)
        argv = self.build_argv(width, height)
        logger.info(f"Starting generator process: {argv}")

        try:
            proc = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            raise TransportFailure(f"could not start generator '{argv[0]}': {e}") from e

        deadline = time.monotonic() + timeout_s
        while True:
            if cancel_event is not None and cancel_event.is_set():
                self._kill(proc)
                raise GeneratorCancelled()
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._kill(proc)
                logger.warning(f"Generator process timed out after {timeout_s} s")
                raise GeneratorTimeout(timeout_s)
            try:
                output, errors = proc.communicate(timeout=min(self.poll_interval_s, remaining))
                break
            except subprocess.TimeoutExpired:
                continue

        output = output or ""
        errors = (errors or "").strip()
        if proc.returncode != 0:
            logger.warning(f"Generator exited with status {proc.returncode}")
            return GeneratorResponse.error(
                errors or output.strip() or f"generator exited with status {proc.returncode}"
            )
        if errors:
            # JVM notices and warnings; the maze is stdout only
            logger.debug(f"Generator stderr: {errors}")
        if not output.strip():
            return GeneratorResponse.error(EMPTY_OUTPUT_DETAIL)
        return GeneratorResponse.ok(output)

    @staticmethod
    def _kill(proc: subprocess.Popen) -> None:
        proc.kill()
        try:
            proc.communicate(timeout=5)
        except subprocess.TimeoutExpired:
            logger.error(f"Generator process {proc.pid} did not exit after kill")


class HttpGenerator(MazeGenerator):
    """
    Asks a maze endpoint over HTTP.

    The request is a form-encoded POST with `width` and `height` fields and
    the maze comes back as the plain-text body. Non-2xx answers are error
    responses; connection problems are transport failures.
    """

    def __init__(self, url: str, session: Optional[requests.Session] = None) -> None:
        if not url:
            raise ValueError("Generator URL must not be empty.")
        self.url = url
        self.session = session or requests.Session()

    def describe(self) -> str:
        return self.url

    def generate(
        self,
        width: int,
        height: int,
        *,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        cancel_event: Optional[threading.Event] = None,
    ) -> GeneratorResponse:
        _check_cancelled(cancel_event)
        logger.info(f"POST {self.url} width={width} height={height}")

        try:
            response = self.session.post(
                self.url,
                data={"width": width, "height": height},
                timeout=timeout_s,
            )
        except requests.Timeout as e:
            raise GeneratorTimeout(timeout_s) from e
        except requests.RequestException as e:
            raise TransportFailure(str(e)) from e

        # The answer of a cancelled request is discarded even if it arrived
        _check_cancelled(cancel_event)

        text = response.text or ""
        if not response.ok:
            logger.warning(f"Generator endpoint answered {response.status_code}")
            detail = f"HTTP {response.status_code} {response.reason or ''}".rstrip()
            if text.strip():
                detail = f"{detail}: {text.strip()}"
            return GeneratorResponse.error(detail)
        if not text.strip():
            return GeneratorResponse.error(EMPTY_OUTPUT_DETAIL)
        return GeneratorResponse.ok(text)
