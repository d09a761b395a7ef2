# discmode — Xbox / PC drive-mode switcher.
# Reads and rewrites the 2-byte signature at offset 510 of a raw block device.
#
# Architecture (bottom → top):
#   runner      — Run one shell command, capture stdout as text
#   sector      — Signature codec: Mode enum, read_mode / write_mode
#   platforms   — Per-OS listers (wmic / diskutil / lsblk) → candidate paths
#   enumerator  — Probe candidates, yield recognised Devices
#   privileges  — root / Administrator check for user hints
#   controller  — list / read / set / toggle
#   cli         — argparse entry point
