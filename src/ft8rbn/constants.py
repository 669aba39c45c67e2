from __future__ import annotations

"""
Wire-level constants for the pruned WSJT-X UDP broadcast protocol.

Only schema 2 is produced. Fields the RBN Aggregator ignores are filled with
the placeholder values below.
"""

# Header
MAGIC = 0xADBCCBDA
SCHEMA_VERSION = 2
HEADER = bytes((0xAD, 0xBC, 0xCB, 0xDA, 0x00, 0x00, 0x00, 0x02))

# Message types
MSG_STATUS = 1
MSG_DECODE = 2

# Fixed strings
MODE = "FT8"
SOFTWARE_ID = "QMTECH FT8 RX 1.0"
OPERATOR_CALL = "AB1CDE"
OPERATOR_GRID = "AB12"
TARGET_GRID = "AB12"

# Token limits on a decode line (scanf "%13s %4s")
MAX_CALLSIGN_LEN = 13
MAX_GRID_LEN = 4

# Channel windows are 4 kHz wide; fallback rounds down after a 200 Hz offset
CHANNEL_WIDTH_HZ = 4000
FALLBACK_OFFSET_HZ = 200
FALLBACK_STEP_HZ = 1000

# Pause after each status datagram so the receiver sees it before the decode
STATUS_PACING_S = 0.001

# Above this many bytes in one run the aggregator may start dropping decodes
UPLOAD_WARN_BYTES = 65535
