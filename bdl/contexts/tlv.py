"""
BDL TLV Context

Frames a payload as a flat sequence of type-length-value records:

    +------+--------+-----------------+
    | type | length | value[length]   |
    |  u1  |   u1   |                 |
    +------+--------+-----------------+

Framing walks the buffer with a Kaitai stream cursor and stops, without
error, when:
- fewer than two bytes remain (no room for a header)
- a frame's declared value runs past the end of the buffer (truncation)
- MAX_FRAMES frames have been produced (bound on adversarial input)

In every case the unconsumed bytes are reported as remainder.
"""

from __future__ import annotations

import io
import logging

from kaitaistruct import KaitaiStream

from bdl.ast import StructureHints, TlvFrame, TlvSequenceAst
from bdl.context import Interpreter, Schema

logger = logging.getLogger(__name__)

MAX_FRAMES = 64
HEADER_SIZE = 2


class TlvInterpreter(Interpreter):

    @property
    def schema(self) -> Schema:
        return Schema.TLV

    def interpret(self, data: bytes) -> TlvSequenceAst:
        return frame_tlv(data)


def infer_structure(data: bytes) -> StructureHints:
    """Frame any payload as TLV to hint at structure the schema does not declare."""
    return StructureHints(frames=frame_tlv(data, stop_level=logging.DEBUG).frames)


def frame_tlv(
    data: bytes,
    max_frames: int = MAX_FRAMES,
    stop_level: int = logging.WARNING,
) -> TlvSequenceAst:
    """Frame `data` as TLV records. Early stops are logged at `stop_level`."""
    stream = KaitaiStream(io.BytesIO(data))
    total = stream.size()
    frames: list[TlvFrame] = []
    offset = 0

    while total - offset >= HEADER_SIZE and len(frames) < max_frames:
        frame_type = stream.read_u1()
        length = stream.read_u1()
        value_end = offset + HEADER_SIZE + length

        if value_end > total:
            logger.log(
                stop_level,
                "TLV frame %d at %#x declares %d value bytes but only %d remain",
                len(frames), offset, length, total - offset - HEADER_SIZE,
            )
            stream.seek(offset)
            break

        value = stream.read_bytes(length)
        frames.append(TlvFrame(
            index=len(frames),
            offset=offset,
            type=frame_type,
            length=length,
            value_hex=value.hex(),
        ))
        offset = stream.pos()

    if len(frames) >= max_frames and total - offset > 0:
        logger.log(
            stop_level,
            "TLV framing stopped at the %d-frame limit with %d bytes left",
            max_frames, total - offset,
        )

    logger.debug("Framed %d TLV record(s), %d remainder byte(s)", len(frames), total - offset)
    return TlvSequenceAst(frames=tuple(frames), remainder_bytes=total - offset)
