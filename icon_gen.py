"""Generate the system-tray icon (64×64 PIL Image, in-memory)."""

from PIL import Image, ImageDraw

from habits import HABITS, LIGHT, HabitRecord, Theme
from layout import row_centered_left


def create_icon_image(record: HabitRecord | None = None,
                      theme: Theme = LIGHT) -> Image.Image:
    """Return a 64×64 RGBA image with one dot per habit, filled when done."""
    size = 64
    img = Image.new("RGBA", (size, size), theme.background)
    draw = ImageDraw.Draw(img)
    record = record or HabitRecord()

    dot = 16
    gap = 4
    x = row_centered_left(size, len(HABITS), dot, gap)
    y = (size - dot) / 2
    for habit in HABITS:
        box = [x, y, x + dot - 1, y + dot - 1]
        if record.is_done(habit.key):
            draw.ellipse(box, fill=habit.color)
        else:
            draw.ellipse(box, outline=habit.color, width=3)
        x += dot + gap

    return img
