import sys

from status_board.grid_view import render_text, status_counts
from status_board.layouts import auto_fill_sequential, toggle_corridor
from status_board.models import RoomConfig, SeatDirection


direction = sys.argv[1] if len(sys.argv) > 1 else SeatDirection.BOTTOM_RIGHT.value

config = RoomConfig(
    seats_per_row = 6,
    total_rows = 4,
    seat_direction = direction
)
config = toggle_corridor("col", 2, config)
config = toggle_corridor("row", 1, config)

status_by_seat = {1: "online", 2: "online", 7: "need-help"}


print(f"\n--- {config.display_title} ({direction}) ---")
print(render_text(config, status_by_seat = status_by_seat))
print("Front of room")

counts = status_counts(config, (), status_by_seat.values())
print(f"\nReady {counts['online']} | Need help {counts['need_help']} | Absent {counts['absent']}")


custom = RoomConfig(seats_per_row = 3, total_rows = 2, use_custom_layout = True)
seats = auto_fill_sequential(custom)

print("\n--- Custom layout, auto filled ---")
print(render_text(custom, seats))
