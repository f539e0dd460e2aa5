import pytest

from cbc_streamlink.errors import InvalidIdentifier
from cbc_streamlink.utils.identifiers import ApiGeneration, IdentifierResolver, trailing_id

ALL_GENERATIONS = list(ApiGeneration)


@pytest.mark.parametrize("generation", ALL_GENERATIONS)
@pytest.mark.parametrize("value", ["0", "7", "30045", "2655429955", "000123"])
def test_numeric_input_is_returned_unchanged(generation, value):
    assert IdentifierResolver(generation).resolve(value) == value


@pytest.mark.parametrize("generation", ALL_GENERATIONS)
@pytest.mark.parametrize(
    "slug",
    ["event-name-30045", "curling-norway-vs-canada-mixed-doubles-round-robin-30045"],
)
def test_slugged_urls_resolve_to_trailing_id(generation, slug):
    url = f"https://www.cbc.ca/player/play/{slug}"
    assert IdentifierResolver(generation).resolve(url) == "30045"


def test_bistro_url_with_bare_id():
    resolver = IdentifierResolver(ApiGeneration.BISTRO)
    assert resolver.resolve("https://www.cbc.ca/player/play/2655429955") == "2655429955"


@pytest.mark.parametrize("generation", ALL_GENERATIONS)
@pytest.mark.parametrize(
    "url",
    [
        "https://www.cbc.ca/player/play/2655429955?cmp=x",
        "https://www.cbc.ca/player/play/event-name-2655429955/?cmp=x&utm=feed",
        "https://www.cbc.ca/player/play/2655429955#top",
    ],
)
def test_query_and_fragment_are_ignored(generation, url):
    assert IdentifierResolver(generation).resolve(url) == "2655429955"


def test_bistro_rejects_dotted_ids():
    with pytest.raises(InvalidIdentifier):
        IdentifierResolver(ApiGeneration.BISTRO).resolve("1.6321234")


@pytest.mark.parametrize(
    "value",
    ["1.6321234", "https://www.cbc.ca/player/play/1.6321234", "https://www.cbc.ca/player/play/video/1.6321234"],
)
def test_catalog_accepts_dotted_pairs(value):
    assert IdentifierResolver(ApiGeneration.CATALOG).resolve(value) == "1.6321234"


def test_graphql_uses_last_path_segment():
    resolver = IdentifierResolver(ApiGeneration.GRAPHQL)
    assert resolver.resolve("https://www.cbc.ca/player/play/video/9.6468131") == "9.6468131"
    assert resolver.resolve("https://www.cbc.ca/player/play/video/hockey-final-9.6468131/") == "9.6468131"


def test_graphql_never_picks_a_leading_segment():
    resolver = IdentifierResolver(ApiGeneration.GRAPHQL)
    with pytest.raises(InvalidIdentifier):
        resolver.resolve("https://www.cbc.ca/player/play/12345/highlights")


@pytest.mark.parametrize("generation", ALL_GENERATIONS)
@pytest.mark.parametrize(
    "value",
    ["", "abc", "https://example.com/player/play/30045", "https://www.cbc.ca/", "12a45", "-30045"],
)
def test_invalid_input_is_rejected(generation, value):
    resolver = IdentifierResolver(generation)
    with pytest.raises(InvalidIdentifier):
        resolver.resolve(value)


def test_invalid_identifier_is_a_value_error():
    with pytest.raises(ValueError):
        IdentifierResolver().resolve("not an id")


def test_trailing_id_of_paths():
    assert trailing_id("/player/play/video/event-name-30045") == "30045"
    assert trailing_id("https://www.cbc.ca/player/play/video/9.6468131") == "9.6468131"
    assert trailing_id("/player/play/video/highlights") is None
