"""Per-command stdout/stderr sinks that honor an output redirection."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import BinaryIO, Dict, Iterator, Optional, TextIO, Union

from .exceptions import ShellIOError
from .redirection import Channel, Redirection

log = logging.getLogger(__name__)

Data = Union[str, bytes]


def _io_error(target: str, exc: OSError) -> ShellIOError:
    return ShellIOError(f"{target}: {exc.strerror or exc}")


class Sink(ABC):
    @abstractmethod
    def write(self, data: Data) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def flush(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class StreamSink(Sink):
    """Writes to an inherited text stream such as ``sys.stdout``."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, data: Data) -> None:
        if isinstance(data, str):
            self._stream.write(data)
            return
        buffer = getattr(self._stream, "buffer", None)
        if buffer is None:
            self._stream.write(data.decode("utf-8", errors="replace"))
            return
        # Keep ordering with text already queued on the wrapper
        self._stream.flush()
        buffer.write(data)
        buffer.flush()

    def flush(self) -> None:
        self._stream.flush()


class SharedHandle:
    """An open redirection file that both sinks may write through.

    Every access goes through :meth:`borrow`, which hands out the file to one
    caller at a time and refuses nested borrows.
    """

    def __init__(self, fp: BinaryIO, target: str) -> None:
        self._fp = fp
        self.target = target
        self._borrowed = False

    @property
    def closed(self) -> bool:
        return self._fp.closed

    @contextmanager
    def borrow(self) -> Iterator[BinaryIO]:
        if self._borrowed:
            raise RuntimeError(f"redirection target {self.target!r} is already borrowed")
        self._borrowed = True
        try:
            yield self._fp
        finally:
            self._borrowed = False

    def close(self) -> None:
        if self._fp.closed:
            return
        with self.borrow() as fp:
            try:
                try:
                    fp.flush()
                finally:
                    fp.close()
            except OSError as exc:
                raise _io_error(self.target, exc) from exc


class FileSink(Sink):
    def __init__(self, handle: SharedHandle) -> None:
        self._handle = handle

    def write(self, data: Data) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        with self._handle.borrow() as fp:
            try:
                fp.write(data)
            except OSError as exc:
                raise _io_error(self._handle.target, exc) from exc

    def flush(self) -> None:
        with self._handle.borrow() as fp:
            try:
                fp.flush()
            except OSError as exc:
                raise _io_error(self._handle.target, exc) from exc


class OutputRouter:
    """Chooses, once per command, where each output channel is written.

    Use as a context manager; the redirection file (if any) is opened on
    entry and flushed and closed on exit.
    """

    def __init__(
        self,
        redirection: Optional[Redirection] = None,
        *,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self.redirection = redirection
        self._inherited = {Channel.STDOUT: stdout, Channel.STDERR: stderr}
        self._handle: Optional[SharedHandle] = None
        self._sinks: Dict[Channel, Sink] = {}

    def open(self) -> "OutputRouter":
        if self._sinks:
            return self
        if self.redirection is not None:
            target = self.redirection.target
            try:
                fp = open(target, self.redirection.mode.file_mode)
            except OSError as exc:
                raise _io_error(target, exc) from exc
            self._handle = SharedHandle(fp, target)
            log.debug("Redirecting %s to %s (%s)", self.redirection.source.value, target, self.redirection.mode.value)
        for channel in Channel:
            self._sinks[channel] = self._select(channel)
        return self

    def _select(self, channel: Channel) -> Sink:
        if self._handle is not None and self.redirection is not None and self.redirection.source.covers(channel):
            return FileSink(self._handle)
        stream = self._inherited[channel]
        if stream is None:
            stream = sys.stdout if channel is Channel.STDOUT else sys.stderr
        return StreamSink(stream)

    def sink(self, channel: Channel) -> Sink:
        if not self._sinks:
            raise RuntimeError("OutputRouter is not open")
        return self._sinks[channel]

    @property
    def stdout(self) -> Sink:
        return self.sink(Channel.STDOUT)

    @property
    def stderr(self) -> Sink:
        return self.sink(Channel.STDERR)

    @property
    def redirected(self) -> bool:
        return self._handle is not None

    def close(self) -> None:
        try:
            for sink in self._sinks.values():
                if isinstance(sink, StreamSink):
                    sink.flush()
        finally:
            if self._handle is not None:
                self._handle.close()

    def __enter__(self) -> "OutputRouter":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()
