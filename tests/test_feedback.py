"""Tests for self-expiring presentation effects."""

from taptitan.models import HitGrade
from taptitan.renderer.feedback import EffectQueue, HitFlash, TitanShake


def test_flash_fades_and_expires():
    flash = HitFlash(grade=HitGrade.GOOD, started_at=1000.0, duration=400.0)
    assert flash.alpha(1000.0) == 255
    assert flash.alpha(1200.0) == 127
    assert not flash.expired(1399.0)
    assert flash.expired(1400.0)
    assert flash.alpha(2000.0) == 0


def test_shake_stops_after_duration():
    shake = TitanShake(started_at=0.0)
    assert shake.offset(10.0) != 0
    assert shake.offset(150.0) == 0


def test_miss_flashes_without_shaking():
    effects = EffectQueue()
    effects.on_judgment(HitGrade.MISS, 0.0, damaged=False)
    assert effects.flash.grade == HitGrade.MISS
    assert effects.shake is None

    effects.on_judgment(HitGrade.PERFECT, 100.0, damaged=True)
    effects.prune(300.0)
    assert effects.shake is None
    assert effects.flash is not None
    effects.prune(600.0)
    assert effects.flash is None
