"""Listing search: typed query parameters and the FilterSet that applies them."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from functools import cached_property
from typing import Mapping

import django_filters  # type: ignore
from django.db.models import Count, Q, QuerySet  # type: ignore

from .models import Listing

MIN_PATTERN_LENGTH = 4

SORT_ORDERINGS: dict[str, tuple[str, ...]] = {
    "newest": ("-created_at", "-id"),
    "price_asc": ("price", "-created_at"),
    "price_desc": ("-price", "-created_at"),
    "rating_desc": ("-rating_average", "-rating_count", "-created_at"),
}
DEFAULT_SORT = "newest"


def search_patterns(term: str) -> list[str]:
    """Patterns a free-text location term is matched with.

    The whole term always counts. Terms of four or more characters also
    match through every four-character window, so "ndia" finds "India" and
    a typo such as "amrica" still finds "America" via "rica". Longer
    windows are implied by the four-character ones and are not listed.
    """
    term = term.strip()
    if not term:
        return []
    patterns = [term]
    if len(term) >= MIN_PATTERN_LENGTH:
        for i in range(len(term) - MIN_PATTERN_LENGTH + 1):
            window = term[i:i + MIN_PATTERN_LENGTH]
            if window not in patterns:
                patterns.append(window)
    return patterns


def _parse_decimal(raw) -> Decimal | None:
    if raw in (None, ""):
        return None
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def _parse_float(raw) -> float | None:
    value = _parse_decimal(raw)
    return float(value) if value is not None else None


@dataclass(frozen=True)
class ListingSearchParams:
    """Query parameters of the listing search.

    Every field is optional. Numbers that do not parse are dropped rather
    than rejected, and an unknown ``sort`` falls back to ``newest``.
    """

    location: str = ""
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_rating: float | None = None
    amenities: tuple[str, ...] = field(default_factory=tuple)
    sort: str = DEFAULT_SORT

    @classmethod
    def from_query_params(cls, params: Mapping) -> "ListingSearchParams":
        amenities_raw = params.get("amenities") or ""
        amenities = tuple(
            name.strip() for name in str(amenities_raw).split(",") if name.strip()
        )
        sort = params.get("sort") or DEFAULT_SORT
        if sort not in SORT_ORDERINGS:
            sort = DEFAULT_SORT
        return cls(
            location=(params.get("location") or "").strip(),
            min_price=_parse_decimal(params.get("min_price")),
            max_price=_parse_decimal(params.get("max_price")),
            min_rating=_parse_float(params.get("min_rating")),
            amenities=amenities,
            sort=sort,
        )


def match_location(queryset: QuerySet, term: str) -> QuerySet:
    condition = Q()
    for pattern in search_patterns(term):
        condition |= (
            Q(location__icontains=pattern)
            | Q(country__icontains=pattern)
            | Q(title__icontains=pattern)
        )
    return queryset.filter(condition) if condition else queryset


class ListingFilterSet(django_filters.FilterSet):
    """FilterSet behind the listing search.

    Raw values are parsed once into ``ListingSearchParams``; each filter
    method applies its parsed field, so malformed numbers are ignored
    instead of failing the request. Without ``sort`` the view's newest-first
    ordering stays in place.
    """

    location = django_filters.CharFilter(method="filter_location")
    min_price = django_filters.CharFilter(method="filter_min_price")
    max_price = django_filters.CharFilter(method="filter_max_price")
    min_rating = django_filters.CharFilter(method="filter_min_rating")
    # CSV of amenity names, requires all selected amenities
    amenities = django_filters.CharFilter(method="filter_amenities")
    sort = django_filters.CharFilter(method="filter_sort")

    class Meta:
        model = Listing
        fields: list[str] = []

    @cached_property
    def params(self) -> ListingSearchParams:
        return ListingSearchParams.from_query_params(self.data)

    def filter_location(self, queryset, name, value):  # type: ignore
        return match_location(queryset, self.params.location)

    def filter_min_price(self, queryset, name, value):  # type: ignore
        if self.params.min_price is None:
            return queryset
        return queryset.filter(price__gte=self.params.min_price)

    def filter_max_price(self, queryset, name, value):  # type: ignore
        if self.params.max_price is None:
            return queryset
        return queryset.filter(price__lte=self.params.max_price)

    def filter_min_rating(self, queryset, name, value):  # type: ignore
        if self.params.min_rating is None:
            return queryset
        return queryset.filter(rating_average__gte=self.params.min_rating)

    def filter_amenities(self, queryset, name, value):  # type: ignore
        names = set(self.params.amenities)
        if not names:
            return queryset
        return queryset.annotate(
            matched_amenities=Count("amenities", filter=Q(amenities__name__in=names), distinct=True)
        ).filter(matched_amenities=len(names))

    def filter_sort(self, queryset, name, value):  # type: ignore
        return queryset.order_by(*SORT_ORDERINGS[self.params.sort])
