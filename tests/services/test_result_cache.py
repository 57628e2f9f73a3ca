from src.schemas.face import DetectionRegion, ValidationResult
from src.services.result_cache import CachedResult, ResultCache


def _entry(generation: int, url: str = "http://x/a.jpg") -> CachedResult:
    region = DetectionRegion(left_col=0, top_row=0, right_col=0, bottom_row=0)
    return CachedResult(
        generation=generation,
        image_url=url,
        result=ValidationResult(regions=(region,), face_count=1),
    )


class TestResultCache:
    def test_empty_by_default(self) -> None:
        assert ResultCache().get() is None

    def test_set_then_get(self) -> None:
        cache = ResultCache()
        entry = _entry(1)
        cache.set(entry)

        assert cache.get() is entry

    def test_write_wins(self) -> None:
        cache = ResultCache()
        cache.set(_entry(1, "http://x/a.jpg"))
        latest = _entry(2, "http://x/b.jpg")
        cache.set(latest)

        assert cache.get() is latest

    def test_clear(self) -> None:
        cache = ResultCache()
        cache.set(_entry(1))
        cache.clear()

        assert cache.get() is None
        cache.clear()
        assert cache.get() is None
