BLOCK = "█"  # full block
PATH = " "

OBJECT_TYPES = {
    "empty": 0,
    "wall": 1,
    "goal": 2,
    "agent": 3,
}
OBJECT_TYPES_INV = {v: k for k, v in OBJECT_TYPES.items()}

DEFAULT_COLORS = {
    "wall": "darkgrey",
    "path": "lightgray",
    "cursor": "red",
    "border": "black",
    "goal": "green",
}
