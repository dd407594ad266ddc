"""Decode tests for modules using postponed annotation evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

from envbind.config.errors import UnsupportedTypeError
from envbind.config.mapper import decode, env_field


@dataclass
class ModuleLevelConfig:
    port: int = env_field("PORT", default=0)
    ratio: Optional[float] = env_field("RATIO", default=None)
    debug: bool = env_field("DEBUG", default=False)


def test_string_annotations_are_resolved():
    cfg = ModuleLevelConfig()
    decode(cfg, environ={"PORT": "5", "RATIO": "0.5", "DEBUG": "t"})

    assert cfg.port == 5
    assert cfg.ratio == 0.5
    assert cfg.debug is True


def test_unresolvable_untagged_annotation_is_ignored():
    class Helper:
        pass

    @dataclass
    class LocalConfig:
        port: int = env_field("PORT", default=0)
        helper: Helper = None

    cfg = LocalConfig()
    decode(cfg, environ={"PORT": "5"})

    assert cfg.port == 5
    assert cfg.helper is None


def test_unresolvable_tagged_annotation_is_unsupported():
    class Helper:
        pass

    @dataclass
    class LocalConfig:
        helper: Helper = env_field("HELPER", default=None)

    cfg = LocalConfig()
    decode(cfg, environ={})
    assert cfg.helper is None

    with pytest.raises(UnsupportedTypeError) as exc_info:
        decode(cfg, environ={"HELPER": "x"})

    assert exc_info.value.field_name == "helper"
