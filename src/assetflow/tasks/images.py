"""Image task: copy images to the output tree, re-encoding the common formats.

Binary files bypass the text stream; Pillow handles the re-encoding.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict

from PIL import Image

from ..orchestrator import TaskName, task
from ..orchestrator.config import BuildConfig, Flags
from ..orchestrator.logging import get_logger
from ..orchestrator.utils import expand_braces, expand_globs, glob_base


OPTIMIZABLE: Dict[str, str] = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".gif": "GIF",
}
JPEG_QUALITY = 85


def optimize_image(source: Path, target: Path, fmt: str) -> None:
    with Image.open(source) as img:
        save_kwargs = {"optimize": True}
        if fmt == "JPEG":
            save_kwargs["quality"] = JPEG_QUALITY
            if img.mode not in ("RGB", "L", "CMYK"):
                img = img.convert("RGB")
        img.save(target, format=fmt, **save_kwargs)


@task(
    name=TaskName.IMAGES,
    inputs=lambda c: list(c.images.origin),
    outputs=lambda c: [c.images.dest],
)
def images(config: BuildConfig, flags: Flags):
    logger = get_logger("assetflow.tasks.images")
    out_dir = Path(config.images.dest)
    stats = {"optimized": 0, "copied": 0}

    for pattern in config.images.origin:
        for alt in expand_braces(pattern):
            base = glob_base(alt)
            for f in expand_globs([alt]):
                target = out_dir / f.relative_to(base)
                target.parent.mkdir(parents=True, exist_ok=True)
                fmt = OPTIMIZABLE.get(f.suffix.lower())
                if fmt:
                    optimize_image(f, target, fmt)
                    stats["optimized"] += 1
                else:
                    shutil.copy2(f, target)
                    stats["copied"] += 1

    logger.info("Image stats: %s", stats)
