from __future__ import annotations

from dataclasses import dataclass

CATEGORY_CUP = "Cup"
CATEGORY_OTHER = "Other"

TYPE_OWALA = "Owala"
TYPE_STANLEY = "Stanley"
TYPE_KEYCHAIN = "Keychain"
TYPE_OTHER = "Other"

KEYCHAIN_SKU = "Default"
OWALA_MARKER = "Body"
STANLEY_SKUS = frozenset({"Green", "Blue", "Multi-Color", "Gradient"})

UNKNOWN_COLOR = "Unknown"
UNKNOWN_STATUS = "Unknown"

STATUS_LABELS: dict[int, str] = {
    101: "Awaiting Shipment",
    102: "Shipped",
    103: "Delivered",
    104: "Completed",
    105: "Cancelled",
}


@dataclass(frozen=True)
class SkuClass:
    category: str
    product_type: str
    display: str

    def to_dict(self) -> dict[str, str]:
        return {
            "category": self.category,
            "product_type": self.product_type,
            "display": self.display,
        }


@dataclass(frozen=True)
class Piece:
    name: str
    type: str


def _pieces(*names: str) -> tuple[Piece, ...]:
    return tuple(Piece(name=name, type=name.split(" ")[-1]) for name in names)


# Printed pieces that make up one Owala cup, keyed by the shop SKU name.
OWALA_PIECES: dict[str, tuple[Piece, ...]] = {
    "Purple Body": _pieces("Purple Bottle", "Magenta Lid", "Yellow Handle", "Blue Ring", "Orange Button"),
    "White Body": _pieces("White Bottle", "Gray Lid", "White Handle", "Black Button", "Black Ring"),
    "Pink Body": _pieces("Pink Bottle", "Purple Lid", "Yellow Handle", "Yellow Ring", "White Button"),
    "Orange Body": _pieces("Orange Bottle", "Gray Lid", "Brown Handle", "White Ring", "Orange Button"),
    "Lime/Neon Green Body": _pieces(
        "Lime Green Bottle", "Blue Lid", "Green Handle", "Mint Green Ring", "Mint Green Button"
    ),
    "Light Green Body": _pieces("Mint Green Bottle", "Pink Lid", "White Handle", "Yellow Ring", "Brown Button"),
}


def classify_sku(sku_name: str) -> SkuClass:
    if sku_name == KEYCHAIN_SKU:
        return SkuClass(category=CATEGORY_OTHER, product_type=TYPE_KEYCHAIN, display="Animal Keychain")

    if OWALA_MARKER in sku_name:
        return SkuClass(
            category=CATEGORY_CUP,
            product_type=TYPE_OWALA,
            display=f"Owala {sku_name.replace(' Body', '')}",
        )

    if sku_name in STANLEY_SKUS:
        return SkuClass(category=CATEGORY_CUP, product_type=TYPE_STANLEY, display=f"Stanley {sku_name}")

    return SkuClass(category=CATEGORY_OTHER, product_type=TYPE_OTHER, display=sku_name)


def pieces_for_sku(sku_name: str) -> tuple[Piece, ...]:
    if OWALA_MARKER not in sku_name:
        return ()
    return OWALA_PIECES.get(sku_name, ())


def extract_piece_color(piece_name: str) -> str:
    words = piece_name.split(" ")
    if len(words) < 2:
        return UNKNOWN_COLOR
    return " ".join(words[:-1])


def status_label(code: int | None) -> str:
    if code is None:
        return UNKNOWN_STATUS
    return STATUS_LABELS.get(code, f"Status {code}")
