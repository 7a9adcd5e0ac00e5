from wrongnote.stats import compute_stats, resolution_rate


def test_empty_input():
    stats = compute_stats([])
    assert stats.total_wrong == 0
    assert stats.resolved == 0
    assert stats.resolution_rate == 0
    assert stats.worst_chapter == "-"
    assert stats.bar_data == []
    assert [(p.name, p.value) for p in stats.pie_data] == [("Low", 0), ("Mid", 0), ("High", 0), ("Top", 0)]
    assert stats.recent_wrongs == []
    assert [r.full_mark for r in stats.radar_data] == [10, 10, 10, 10]


def test_pie_data_counts_levels_in_fixed_order(make_record):
    records = [
        make_record(problem_level="Low"),
        make_record(problem_level="Mid"),
        make_record(problem_level="Mid"),
        make_record(problem_level="High"),
    ]
    stats = compute_stats(records)
    assert [(p.name, p.value) for p in stats.pie_data] == [("Low", 1), ("Mid", 2), ("High", 1), ("Top", 0)]


def test_resolution_rate(make_record):
    records = [make_record(is_resolved=True), make_record(is_resolved=True), make_record()]
    stats = compute_stats(records)
    assert stats.resolved == 2
    assert stats.resolution_rate == 67


def test_resolution_rate_rounds_half_up():
    assert resolution_rate(1, 8) == 13
    assert resolution_rate(0, 5) == 0
    assert resolution_rate(5, 5) == 100
    assert resolution_rate(0, 0) == 0


def test_worst_chapter_tie_goes_to_first_seen(make_record):
    records = [
        make_record(chapter="B"),
        make_record(chapter="A"),
        make_record(chapter="A"),
        make_record(chapter="B"),
    ]
    assert compute_stats(records).worst_chapter == "B"


def test_worst_chapter_picks_strict_max(make_record):
    records = [make_record(chapter="B"), make_record(chapter="A"), make_record(chapter="A")]
    assert compute_stats(records).worst_chapter == "A"


def test_bar_data_top_six_stable(make_record):
    chapters = ["c1", "c2", "c3", "c4", "c5", "c6", "c7"]
    records = [make_record(chapter=c) for c in chapters]
    records += [make_record(chapter="c7"), make_record(chapter="c7")]
    records += [make_record(chapter="c3")]
    bar = compute_stats(records).bar_data
    assert [(b.name, b.count) for b in bar] == [
        ("c7", 3), ("c3", 2), ("c1", 1), ("c2", 1), ("c4", 1), ("c5", 1),
    ]


def test_bar_data_larger_count_first(make_record):
    records = [make_record(chapter="small")] * 2 + [make_record(chapter="big")] * 3
    bar = compute_stats(records).bar_data
    assert [b.name for b in bar] == ["big", "small"]
    counts = [b.count for b in bar]
    assert counts == sorted(counts, reverse=True)


def test_radar_full_mark_shared_and_scaled(make_record):
    records = [make_record(question_type="Application") for _ in range(12)]
    records.append(make_record(question_type="Concept"))
    radar = compute_stats(records).radar_data
    assert [r.subject for r in radar] == ["개념", "계산", "응용", "문제해결"]
    assert [r.a for r in radar] == [1, 0, 12, 0]
    assert {r.full_mark for r in radar} == {12}


def test_radar_full_mark_floor(make_record):
    radar = compute_stats([make_record(question_type="Concept")]).radar_data
    assert all(r.full_mark == 10 for r in radar)


def test_recent_wrongs_sorted_by_date_desc_and_stable(make_record):
    records = [
        make_record(id="old", date="2024-01-01"),
        make_record(id="same1", date="2024-03-01"),
        make_record(id="new", date="2024-05-01"),
        make_record(id="same2", date="2024-03-01"),
    ]
    stats = compute_stats(records)
    assert [r.id for r in stats.recent_wrongs] == ["new", "same1", "same2", "old"]
    # input left untouched
    assert [r.id for r in records] == ["old", "same1", "new", "same2"]


def test_recent_wrongs_capped_at_100(make_record):
    records = [make_record(date=f"2024-01-{(i % 28) + 1:02d}") for i in range(150)]
    stats = compute_stats(records)
    assert stats.total_wrong == 150
    assert len(stats.recent_wrongs) == 100


def test_deterministic(make_record):
    records = [make_record(chapter=c) for c in ["x", "y", "y", "x", "z"]]
    assert compute_stats(records) == compute_stats(records)


def test_serializes_with_chart_keys(make_record):
    dumped = compute_stats([make_record()]).model_dump(by_alias=True)
    assert set(dumped) == {
        "totalWrong", "resolved", "resolutionRate", "worstChapter",
        "radarData", "barData", "pieData", "recentWrongs",
    }
    assert set(dumped["radarData"][0]) == {"subject", "A", "fullMark"}
    assert dumped["recentWrongs"][0]["isResolved"] is False
