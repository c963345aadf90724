"""Static catalog of product mockup presets.

Each preset is a pre-written instruction for the image-edit model. The
catalog is read-only and defined at import time.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MockupPreset:
    """A named instruction template for a common product mockup."""

    id: str
    name: str
    icon: str  # Emoji shown on the preset button
    prompt_template: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "prompt_template": self.prompt_template,
        }


MOCKUP_PRESETS: tuple[MockupPreset, ...] = (
    MockupPreset(
        id="mug",
        name="Ceramic Mug",
        icon="☕",
        prompt_template=(
            "Place this logo realistically on a clean white ceramic coffee mug "
            "sitting on a wooden table. Professional product photography."
        ),
    ),
    MockupPreset(
        id="tshirt",
        name="T-Shirt",
        icon="👕",
        prompt_template=(
            "A high quality photo of a folded black cotton t-shirt with this design "
            "printed on the center chest. Studio lighting."
        ),
    ),
    MockupPreset(
        id="hoodie",
        name="Hoodie",
        icon="🧥",
        prompt_template=(
            "A model wearing a grey streetwear hoodie featuring this logo prominently "
            "on the front. Urban setting."
        ),
    ),
    MockupPreset(
        id="tote",
        name="Tote Bag",
        icon="👜",
        prompt_template=(
            "A canvas tote bag hanging on a coat rack with this logo printed on the "
            "side. Natural lighting."
        ),
    ),
    MockupPreset(
        id="sticker",
        name="Laptop Sticker",
        icon="💻",
        prompt_template=(
            "A die-cut vinyl sticker of this image stuck on a silver laptop cover. "
            "Close up macro shot."
        ),
    ),
    MockupPreset(
        id="sign",
        name="Neon Sign",
        icon="✨",
        prompt_template=(
            "A glowing neon sign on a brick wall in the shape and style of this image. "
            "Night time atmosphere."
        ),
    ),
)

DEFAULT_PRESET_ID = "mug"

# Used when the session references a preset that is not in the catalog.
FALLBACK_MOCKUP_PROMPT = "Place this design on a product."


def get_preset(preset_id: str) -> MockupPreset | None:
    """Look up a preset by id, returning None if it is not in the catalog."""
    return next((p for p in MOCKUP_PRESETS if p.id == preset_id), None)
