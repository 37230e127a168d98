"""blockcmp: compare files block by block at several block sizes.

Modules:
  compare  - the block comparator (single pass over two byte sources)
  sources  - read-only memory-mapped file sources
  pairing  - which files get compared with which, optionally in parallel
  report   - console tables, warnings and errors
  cli      - command line entry point
"""
