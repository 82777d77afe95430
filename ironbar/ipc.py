"""Unix socket transport for IPC commands, usable as client or server."""

from __future__ import annotations

import contextlib
import logging
import os
import socket
import sys
import threading
from pathlib import Path
from typing import Callable

from .messages import Command, MalformedMessageError, Response, ResponseKind, decode_command, encode_command

logger = logging.getLogger(__name__)

SOCKET_NAME = "ironbar-ipc.sock"
READ_SIZE = 1024
_MAX_PATH_BYTES = 100
_POLL_INTERVAL = 0.1

Handler = Callable[[Command], Response]


class IpcConnectionError(ConnectionError):
    """Raised when the IPC server cannot be reached."""

    suggestion = "Is Ironbar running?"

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to connect to Ironbar IPC server at {path}: {cause}")
        self.path = path


def default_socket_path() -> Path:
    """Return the socket path inside ``$XDG_RUNTIME_DIR``, or ``/tmp``."""
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    base = Path(runtime_dir) if runtime_dir is not None else Path("/tmp")
    path = base / SOCKET_NAME
    if len(os.fsencode(path)) > _MAX_PATH_BYTES:
        logger.warning(
            "The IPC socket file's absolute path exceeds 100 bytes, "
            "the socket may fail to create."
        )
    return path


class Ipc:
    """An IPC endpoint bound to a socket path."""

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self._path = Path(path) if path is not None else default_socket_path()
        self._stopped = threading.Event()

    @property
    def path(self) -> Path:
        return self._path

    def send(self, command: Command, debug: bool = False) -> Response:
        """Send ``command`` to the server and return its response."""
        payload = encode_command(command)
        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as conn:
            try:
                conn.connect(os.fspath(self._path))
            except OSError as err:
                raise IpcConnectionError(self._path, err) from err

            if debug:
                print(f"REQUEST JSON: {payload.decode('utf-8')}", file=sys.stderr)

            conn.sendall(payload)
            data = conn.recv(READ_SIZE)
        return Response.decode(data)

    def serve(self, handler: Handler) -> None:
        """Accept connections and answer each command with ``handler``.

        Blocks until :meth:`stop` is called; the socket file is removed on exit.
        """
        if self._path.exists():
            logger.warning("Socket already exists. Did Ironbar exit abruptly?")
            logger.warning("Attempting IPC shutdown to allow binding to address")
            self.shutdown(self._path)

        self._stopped.clear()
        logger.info("Starting IPC on %s", self._path)

        with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as listener:
            listener.bind(os.fspath(self._path))
            try:
                listener.listen()
                listener.settimeout(_POLL_INTERVAL)
                while not self._stopped.is_set():
                    try:
                        conn, _ = listener.accept()
                    except socket.timeout:
                        continue
                    except OSError:
                        logger.exception("Failed to accept IPC connection")
                        continue

                    with conn:
                        conn.settimeout(None)
                        try:
                            self._handle_connection(conn, handler)
                        except (OSError, MalformedMessageError):
                            logger.exception("Failed to handle IPC connection")
            finally:
                self.shutdown(self._path)

    @staticmethod
    def _handle_connection(conn: socket.socket, handler: Handler) -> None:
        data = conn.recv(READ_SIZE)
        command = decode_command(data)
        logger.debug("Received command: %r", command)

        try:
            response = handler(command)
        except Exception:
            logger.exception("IPC command handler failed")
            response = Response(ResponseKind.ERR)

        conn.sendall(response.encode())
        conn.shutdown(socket.SHUT_WR)

    def stop(self) -> None:
        """Ask a running :meth:`serve` loop to finish."""
        self._stopped.set()

    @staticmethod
    def shutdown(path: str | os.PathLike[str]) -> None:
        """Remove the socket file, ignoring any error."""
        with contextlib.suppress(OSError):
            os.remove(path)