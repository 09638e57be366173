from giftfinder.recommendations.config import RecommendationConfig, ScoringWeights
from giftfinder.recommendations.models import CandidateRecord, RecipientProfile
from giftfinder.recommendations.ranking import merge_candidates, rank, score_candidate

SPACE_FAN = RecipientProfile(interests="space")


def _doc(key: str, title: str | None = "Plain Book", **fields) -> dict:
    return {"key": key, "title": title, **fields}


def test_rank_empty_list():
    assert rank([], SPACE_FAN) == []
    assert rank(None, SPACE_FAN) == []


def test_rank_drops_candidates_without_title():
    result = rank([{"title": None, "key": "/a"}, {"title": "Zoo", "key": "/b"}], SPACE_FAN)
    assert len(result) == 1
    assert result[0].key == "/b"


def test_rank_drops_empty_titles_and_non_mapping_entries():
    result = rank([None, "junk", 3, _doc("/a", ""), _doc("/b", "Zoo")], SPACE_FAN)
    assert [g.key for g in result] == ["/b"]


def test_cover_ranks_at_or_above_missing_cover():
    result = rank([_doc("/plain"), _doc("/cover", cover_i=7)], SPACE_FAN)
    assert [g.key for g in result] == ["/cover", "/plain"]


def test_interest_match_in_title_ranks_first():
    result = rank([_doc("/other", "Cooking Basics"), _doc("/space", "Space Adventures")], SPACE_FAN)
    assert result[0].key == "/space"


def test_ties_keep_input_order():
    docs = [_doc(f"/{i}") for i in range(5)]
    assert [g.key for g in rank(docs, SPACE_FAN)] == ["/0", "/1", "/2", "/3", "/4"]


def test_rank_returns_at_most_ten():
    docs = [_doc(f"/{i}") for i in range(15)]
    docs.append(_doc("/best", "Space Space", cover_i=1, author_name=["A"]))
    result = rank(docs, SPACE_FAN)
    assert len(result) == 10
    assert result[0].key == "/best"
    assert [g.key for g in result[1:]] == [f"/{i}" for i in range(9)]


def test_rank_is_idempotent():
    docs = [
        _doc("/a", "Space Atlas", subject=["Astronomy"]),
        _doc("/b", "Moon", subject=["Space flight"], cover_i=3),
        _doc("/c", "Stars"),
    ]
    assert rank(docs, SPACE_FAN) == rank(docs, SPACE_FAN)


def test_url_derivation():
    [gift] = rank([{"title": "T", "cover_i": 12345, "key": "/works/OL1W"}], SPACE_FAN)
    assert gift.cover_url == "https://covers.openlibrary.org/b/id/12345-M.jpg"
    assert gift.catalog_url == "https://openlibrary.org/works/OL1W"


def test_bad_cover_template_falls_back_to_open_library():
    config = RecommendationConfig(cover_url_template="https://x/{coverId}-M.jpg")
    [gift] = rank([{"title": "T", "cover_i": 1}], SPACE_FAN, config)
    assert gift.cover_url == "https://covers.openlibrary.org/b/id/1-M.jpg"


def test_cover_template_without_placeholder_is_ignored():
    config = RecommendationConfig(cover_url_template="https://x/static.jpg")
    assert config.cover_url_template == "https://covers.openlibrary.org/b/id/{cover_id}-M.jpg"


def test_custom_cover_template_is_kept():
    config = RecommendationConfig(cover_url_template="https://img.test/{cover_id}.png")
    assert config.cover_url(5) == "https://img.test/5.png"


def test_missing_fields_use_defaults():
    [gift] = rank([{"title": "Bare"}], SPACE_FAN)
    assert gift.key is None
    assert gift.author == "Unknown author"
    assert gift.year is None
    assert gift.subjects == []
    assert gift.cover_url is None
    assert gift.catalog_url is None


def test_empty_first_author_uses_default():
    [gift] = rank([_doc("/a", author_name=["", "Second"])], SPACE_FAN)
    assert gift.author == "Unknown author"


def test_shaping_keeps_first_author_year_and_six_subjects():
    doc = _doc(
        "/a",
        author_name=["Ann", "Bob"],
        first_publish_year=2001,
        subject=[f"s{i}" for i in range(9)],
    )
    [gift] = rank([doc], SPACE_FAN)
    assert gift.author == "Ann"
    assert gift.year == 2001
    assert gift.subjects == ["s0", "s1", "s2", "s3", "s4", "s5"]


def test_score_counts_title_and_subject_matches():
    profile = RecipientProfile(interests="Space, robots")
    candidate = CandidateRecord(title="Space Robots", subjects=["Space", "Robots in fiction"])
    assert score_candidate(candidate, profile) == 4 + 2 + 4 + 2


def test_score_age_group_bonus():
    kid = RecipientProfile(age_group="kid")
    teen = RecipientProfile(age_group="teen")
    adult = RecipientProfile(age_group="adult")
    childrens = CandidateRecord(title="T", subjects=["Children's fiction"])
    ya = CandidateRecord(title="T", subjects=["Young Adult Fiction"])
    assert score_candidate(childrens, kid) == 3
    assert score_candidate(ya, teen) == 3
    assert score_candidate(childrens, adult) == 0
    assert score_candidate(ya, kid) == 0


def test_score_teen_bonus_without_young_adult():
    teen = RecipientProfile(age_group="teen")
    candidate = CandidateRecord(title="T", subjects=["Teen fiction"])
    assert score_candidate(candidate, teen) == 3


def test_score_no_age_bonus_for_adults_and_seniors():
    candidate = CandidateRecord(title="T", subjects=["Children", "Young adult", "Teen"])
    assert score_candidate(candidate, RecipientProfile(age_group="adult")) == 0
    assert score_candidate(candidate, RecipientProfile(age_group="senior")) == 0


def test_score_completeness_bonus():
    profile = RecipientProfile()
    assert score_candidate(CandidateRecord(title="T"), profile) == 0
    assert score_candidate(CandidateRecord(title="T", cover_id=9), profile) == 2
    assert score_candidate(CandidateRecord(title="T", author_names=["A"]), profile) == 1


def test_score_uses_custom_weights():
    weights = ScoringWeights(title_match=10, has_cover=0)
    candidate = CandidateRecord(title="Space", cover_id=9)
    assert score_candidate(candidate, SPACE_FAN, weights) == 10


def test_rank_respects_config_limits():
    config = RecommendationConfig(max_results=2, max_subjects=1)
    docs = [_doc(f"/{i}", subject=["x", "y"]) for i in range(4)]
    result = rank(docs, SPACE_FAN, config)
    assert len(result) == 2
    assert result[0].subjects == ["x"]


def test_merge_candidates_removes_repeated_keys():
    merged = merge_candidates([
        [_doc("/a", "First"), _doc("/b")],
        [_doc("/a", "Second"), {"title": "Keyless"}, {"title": "Keyless"}, None],
    ])
    assert [(r.key, r.title) for r in merged] == [
        ("/a", "First"),
        ("/b", "Plain Book"),
        (None, "Keyless"),
        (None, "Keyless"),
    ]


def test_merge_candidates_accepts_records():
    record = CandidateRecord(key="/a", title="Zoo")
    assert merge_candidates([[record], []]) == [record]
