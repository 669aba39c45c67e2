from __future__ import annotations

import logging
import time
from typing import Callable, Iterable, Optional

from .encoder import DatagramEncoder
from .line_decoder import decode_lines
from .types import UploadStats
from .wire import read_datagram

logger = logging.getLogger(__name__)


def upload_lines(
    lines: Iterable[str],
    sink,
    encoder: Optional[DatagramEncoder] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> UploadStats:
    """Decode each line and send its datagrams, in order, through ``sink``.

    ``sink`` needs a ``send(payload) -> int`` method. Malformed lines are
    skipped and leave the channel state untouched. After every status datagram
    the loop pauses for the configured pacing delay. Transport errors propagate.
    """
    encoder = encoder or DatagramEncoder()
    pacing_s = encoder.settings.status_pacing_s
    n_lines = n_skipped = n_events = n_status = n_decode = total_bytes = 0

    for lineno, event in decode_lines(lines):
        n_lines += 1
        if event is None:
            n_skipped += 1
            continue
        n_events += 1

        for dg in encoder.encode(event):
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("line %d -> %s", lineno, read_datagram(dg.payload))
            sink.send(dg.payload)
            total_bytes += len(dg)
            if dg.is_status:
                n_status += 1
                if pacing_s > 0:
                    sleep(pacing_s)
            else:
                n_decode += 1

    if total_bytes > encoder.settings.upload_warn_bytes:
        logger.warning("Total upload is %d bytes, risk for lost decodes", total_bytes)

    return UploadStats(
        lines=n_lines,
        skipped=n_skipped,
        events=n_events,
        status_datagrams=n_status,
        decode_datagrams=n_decode,
        total_bytes=total_bytes,
    )
