# storefront/services/sale_service.py
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from storefront.data.models.sale import SaleModel
from storefront.domain.errors import NotFound, ValidationFailed
from storefront.repos.sale_repo import SaleRepo

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
STATS_MONTHS = 6


def parse_bound(value: str | None, end_of_day: bool = False) -> datetime | None:
    """
    Granica zakresu dat z query stringa: YYYY-MM-DD albo pelny ISO-8601.
    Sama data jako `to` oznacza caly ten dzien.
    """
    if not value:
        return None
    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            parsed = datetime.combine(day, time.max if end_of_day else time.min)
        else:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationFailed(f"Invalid date: {value}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class SaleService:
    def __init__(self, db: Session):
        self.repo = SaleRepo(db)

    def page_sales(
        self,
        date_from: str | None,
        date_to: str | None,
        user_id: int | None,
        skip: int,
        take: int,
    ) -> Tuple[List[SaleModel], int]:
        start = parse_bound(date_from)
        end = parse_bound(date_to, end_of_day=True)
        return self.repo.page_sales(start, end, user_id, skip, take)

    def get_sale(self, sale_id: int) -> SaleModel:
        sale = self.repo.get_sale(sale_id)
        if not sale:
            raise NotFound("Sale not found")
        return sale

    def monthly_stats(self, now: datetime | None = None) -> List[Dict]:
        """Sprzedaz z ostatnich 6 miesiecy kalendarzowych (lacznie z biezacym), od najstarszego."""
        now = now or datetime.now(timezone.utc)

        buckets: Dict[Tuple[int, int], Dict] = {}
        for back in range(STATS_MONTHS - 1, -1, -1):
            year, month = shift_month(now.year, now.month, -back)
            buckets[(year, month)] = {"month": MONTHS[month - 1], "year": year, "sales": Decimal("0.00")}

        first_year, first_month = next(iter(buckets))
        start = datetime(first_year, first_month, 1, tzinfo=timezone.utc)

        for total, created_at in self.repo.sales_since(start):
            key = (created_at.year, created_at.month)
            if key in buckets:
                buckets[key]["sales"] += total

        return list(buckets.values())
