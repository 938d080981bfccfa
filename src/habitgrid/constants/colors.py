"""Preset habit colours offered when creating a habit."""

# Neon green, cyan, coral, yellow, purple, orange, light cyan, lime
PRESET_COLORS = [
    "#00ff9d",
    "#00d4ff",
    "#ff6b6b",
    "#ffd93d",
    "#c084fc",
    "#f97316",
    "#22d3ee",
    "#a3e635",
]

DEFAULT_COLOR = PRESET_COLORS[0]
