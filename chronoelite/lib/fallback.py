"""Static payloads served when the catalog database is unreachable.

The comparison section and the featured hero sit above the fold of the
storefront, so those two endpoints answer with these instead of an error.
"""

from __future__ import annotations

from datetime import UTC, datetime

from chronoelite.schemas.watch import Watch, WatchDetail, WatchImages

__all__ = ("comparison_fallback", "featured_fallback")


def _classic(created_at: datetime) -> Watch:
    return Watch(
        id=1,
        name="ChronoElite Classic",
        category="Clássico",
        price=24900,
        original_price=29900,
        rating=4.9,
        reviews=128,
        image_url="/assets/watch-hero.png",
        colors=["#0F172A", "#92400E", "#1E40AF"],
        features=["Automático", "Aço 316L", "Cristal Safira"],
        is_new=True,
        is_limited=False,
        created_at=created_at,
    )


def comparison_fallback() -> list[Watch]:
    now = datetime.now(UTC)
    return [
        _classic(now),
        Watch(
            id=2,
            name="ChronoElite Gold",
            category="Premium",
            price=48900,
            original_price=None,
            rating=5.0,
            reviews=64,
            image_url="/assets/watch-model3.png",
            colors=["#B45309", "#78350F", "#F59E0B"],
            features=["Ouro 18K", "Edição Limitada", "Automático"],
            is_new=False,
            is_limited=True,
            created_at=now,
        ),
    ]


def featured_fallback() -> WatchDetail:
    classic = _classic(datetime.now(UTC))
    return WatchDetail(
        **classic.to_dict(),
        images=WatchImages(
            main="/assets/watch-hero.png",
            details=["/assets/watch-detail.png"],
            straps=["/assets/watch-strap.png"],
            gallery=["/assets/watch-hero.png", "/assets/watch-detail.png", "/assets/watch-strap.png"],
        ),
    )
