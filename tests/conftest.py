from __future__ import annotations

from pathlib import Path

import pytest

from tag_config import TagIndexConfig


def front_matter(**fields) -> str:
    lines = ["---"]
    for key, value in fields.items():
        if isinstance(value, list):
            lines.append(f"{key}:")
            lines.extend(f'  - "{item}"' for item in value)
        elif isinstance(value, bool):
            lines.append(f"{key}: {'true' if value else 'false'}")
        else:
            lines.append(f"{key}: {value}")
    lines.append("---")
    return "\n".join(lines) + "\n\nBody text.\n"


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def write_post(content_root: Path):
    """Write a Markdown post under the content root and return its path."""

    def _write(name: str, text: str | None = None, **fields) -> Path:
        path = content_root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            fields.setdefault("template", "post")
            text = front_matter(**fields)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(content_root: Path) -> TagIndexConfig:
    return TagIndexConfig(content_root=content_root)
