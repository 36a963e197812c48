"""Stable identity → display colour mapping."""

DISTINCT_COLORS: tuple[str, ...] = (
    "#ef4444", "#3b82f6", "#10b981", "#f59e0b", "#8b5cf6",
    "#ec4899", "#06b6d4", "#f97316", "#6366f1", "#84cc16",
    "#14b8a6", "#d946ef", "#e11d48", "#2563eb", "#9333ea",
    "#059669", "#d97706", "#db2777", "#0891b2", "#4f46e5",
)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def string_hash(text: str) -> int:
    """
    Multiply-by-31 rolling hash over the UTF-16 code units of *text*.

    Only the shifted term is truncated to 32 bits; the accumulator is not.
    """
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = code + (_to_int32(_to_int32(h) << 5) - h)
    return h


def string_color(text: str) -> str:
    """Colour for an identity string; identical strings always get identical colours."""
    return DISTINCT_COLORS[abs(string_hash(text)) % len(DISTINCT_COLORS)]
