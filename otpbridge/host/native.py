"""Native messaging host: one framed request in, one framed response out.

Browsers launch the host once per message and append their own arguments
(extension origin, manifest path); those are ignored. stdout carries frames
only, so nothing else may be written to it.
"""

from __future__ import annotations

import sys
from typing import BinaryIO, Sequence

from loguru import logger

from otpbridge.cli.shared.logging_utils import configure_logging
from otpbridge.config.loader import load_config
from otpbridge.config.schema import BridgeConfig
from otpbridge.host.dispatcher import Dispatcher
from otpbridge.protocol.framing import ByteOrder, read_frame, write_frame
from otpbridge.protocol.messages import Response
from otpbridge.protocol.serialization import decode_request, encode_response
from otpbridge.utils.exceptions import ProtocolError


def build_dispatcher(config: BridgeConfig) -> Dispatcher:
    """Wire the YubiKey collaborators described by *config*."""
    from otpbridge.credentials.clock import SystemClock
    from otpbridge.credentials.yubikey import YubiKeyEngine, YubiKeyStore

    return Dispatcher(
        store=YubiKeyStore(serial=config.device.serial, password=config.device.oath_password),
        engine=YubiKeyEngine(case_sensitive=config.matching.case_sensitive),
        clock=SystemClock(),
    )


def serve(
    stdin: BinaryIO,
    stdout: BinaryIO,
    dispatcher: Dispatcher,
    *,
    byte_order: ByteOrder = "native",
) -> Response:
    """Handle exactly one exchange. Protocol faults propagate as ReadError/WriteError."""
    request = decode_request(read_frame(stdin, byte_order=byte_order))
    response = dispatcher.handle_request(request)
    write_frame(stdout, encode_response(response), byte_order=byte_order)
    return response


def main(argv: Sequence[str] | None = None) -> int:
    """Process entrypoint; returns the exit status."""
    try:
        config = load_config()
    except ValueError as exc:
        logger.error("Cannot start native host: {}", exc)
        return 2
    configure_logging(config.logging)
    if argv is None:
        argv = sys.argv[1:]
    if argv:
        logger.debug("Ignoring launcher arguments: {}", list(argv))

    try:
        response = serve(
            sys.stdin.buffer,
            sys.stdout.buffer,
            build_dispatcher(config),
            byte_order=config.protocol.frame_byte_order,
        )
    except ProtocolError as exc:
        logger.error("Native messaging exchange aborted: {}", exc)
        return 1
    logger.info("Answered with {}", type(response).__name__)
    return 0
