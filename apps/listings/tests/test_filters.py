from decimal import Decimal

import pytest

from apps.listings.filters import DEFAULT_SORT, ListingFilterSet, ListingSearchParams, search_patterns
from apps.listings.models import Amenity, Listing
from apps.users.models import User


def test_short_terms_match_whole():
    assert search_patterns("Goa") == ["Goa"]
    assert search_patterns("   ") == []


def test_long_terms_add_four_character_windows():
    assert search_patterns("India") == ["India", "Indi", "ndia"]


def test_repeated_windows_are_listed_once():
    assert search_patterns("aaaaa") == ["aaaaa", "aaaa"]


def test_params_parse_known_values():
    params = ListingSearchParams.from_query_params({
        "location": " Jaipur ",
        "min_price": "50",
        "max_price": "250.5",
        "min_rating": "4",
        "amenities": "Wifi, Pool,,",
        "sort": "price_desc",
    })

    assert params.location == "Jaipur"
    assert params.min_price == Decimal("50")
    assert params.max_price == Decimal("250.5")
    assert params.min_rating == 4.0
    assert params.amenities == ("Wifi", "Pool")
    assert params.sort == "price_desc"


def test_params_ignore_malformed_values():
    params = ListingSearchParams.from_query_params({
        "min_price": "cheap",
        "max_price": "NaN",
        "min_rating": "",
        "sort": "random",
    })

    assert params.min_price is None
    assert params.max_price is None
    assert params.min_rating is None
    assert params.sort == DEFAULT_SORT


@pytest.fixture
def listings(db):
    host = User.objects.create_user(
        email="filters-host@example.com",
        password="HostPass123",
        name="Meera",
        role=User.RoleChoices.HOST,
    )
    wifi = Amenity.objects.create(name="Wifi")
    pool = Amenity.objects.create(name="Pool")

    def make(title, price, location, rating, amenities=()):
        listing = Listing.objects.create(
            host=host,
            title=title,
            description="",
            price=Decimal(price),
            location=location,
            country="India",
            rating_average=rating,
        )
        listing.amenities.set(amenities)
        return listing

    return {
        "hut": make("Hut", "40.00", "Manali", 3.5),
        "villa": make("Villa", "300.00", "Goa", 4.8, [wifi, pool]),
        "flat": make("Flat", "120.00", "Goa", 4.2, [wifi]),
    }


def _titles(data):
    filterset = ListingFilterSet(data, queryset=Listing.objects.all())
    return [listing.title for listing in filterset.qs]


def test_filterset_applies_each_declared_filter(listings):
    assert _titles({"location": "goa", "sort": "price_asc"}) == ["Flat", "Villa"]
    assert _titles({"min_price": "100", "max_price": "200"}) == ["Flat"]
    assert _titles({"min_rating": "4.5"}) == ["Villa"]
    assert _titles({"amenities": "Wifi,Pool"}) == ["Villa"]
    assert _titles({"sort": "rating_desc"}) == ["Villa", "Flat", "Hut"]


def test_filterset_ignores_malformed_numbers(listings):
    titles = _titles({"min_price": "cheap", "max_price": "150", "sort": "price_desc"})

    assert titles == ["Flat", "Hut"]
