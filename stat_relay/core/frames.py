from typing import List

from stat_relay.core.schemas import DisplayFrame, RelationStat, UpStat

FOLLOWER_ICON = "a61"
ARCHIVE_VIEW_ICON = "a2361"

# Static third frame, shown as-is on the display
PLACEHOLDER_FRAME = DisplayFrame(text="3000", icon="i15732")


def build_frames(relation: RelationStat, upstat: UpStat) -> List[DisplayFrame]:
    """Followers, archive views, then the static frame. Always three, always in this order."""
    return [
        DisplayFrame(text=str(relation.follower), icon=FOLLOWER_ICON),
        DisplayFrame(text=str(upstat.archive.view), icon=ARCHIVE_VIEW_ICON),
        PLACEHOLDER_FRAME.model_copy(),
    ]
