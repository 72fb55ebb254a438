"""Configuration knobs for reading game files.

Defaults follow the Blorb and Glulx standards. Hosts that want stricter
checks (or a non-standard executable slot) override them.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class ReaderConfig:
    """Options that aren't stored in the game file itself."""

    executable_id: int = 0               # Blorb resource id of the game program
    require_debug_header: bool = False   # Fail if the "Info" block is missing
    verify_checksum: bool = False        # Reject images with a bad header checksum
