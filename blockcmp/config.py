"""Comparison defaults and tuning constants."""

# Block sizes evaluated when --bsizes is not given (displayed ascending)
DEFAULT_BLOCK_SIZES = (8 * 1024, 4 * 1024, 2 * 1024, 1024, 512, 256, 1)

# Comparison window defaults
#   offset: first byte index compared
#   size:   number of bytes compared, UNBOUNDED = up to the end of the longer file
DEFAULT_OFFSET = 0
UNBOUNDED = -1
DEFAULT_SIZE = UNBOUNDED

# Bytes read from each source per step of the scan.
# Identical chunks are skipped with one slice comparison, so this trades
# memory for fewer Python-level iterations.
SCAN_CHUNK_SIZE = 64 * 1024

# Spaces between table columns
TABLE_PADDING = 4

# Worker processes for comparing file pairs (1 = compare in this process)
DEFAULT_JOBS = 1
