from skillsync.services.snapshot_service import build_rollup


def skill(category, skill_type="technical"):
    return {"name": f"{category}-skill", "category": category, "type": skill_type}


def test_counts_by_type():
    rollup = build_rollup([
        skill("Programming"), skill("Programming"), skill("Communication", "soft"),
        skill("Finance", "transferable"),
    ])
    assert rollup["counts_by_type"] == {"technical": 2, "soft": 1, "transferable": 1}
    assert rollup["total_count"] == 4


def test_top_categories_limited_to_five_by_frequency():
    skills = [skill(c) for c in ["A", "B", "B", "C", "C", "C", "D", "E", "F", "G", "G"]]
    rollup = build_rollup(skills)
    assert rollup["top_categories"] == ["C", "B", "G", "A", "D"]


def test_ties_keep_first_seen_order():
    skills = [skill(c) for c in ["Design", "Data", "Cloud", "Data", "Design", "Cloud"]]
    assert build_rollup(skills)["top_categories"] == ["Design", "Data", "Cloud"]


def test_missing_category_counts_as_general():
    rollup = build_rollup([
        {"name": "x", "category": None, "type": "soft"},
        {"name": "y", "category": "", "type": "soft"},
        skill("Programming"),
    ])
    assert rollup["top_categories"] == ["General", "Programming"]


def test_empty_skill_set():
    assert build_rollup([]) == {
        "counts_by_type": {"technical": 0, "soft": 0, "transferable": 0},
        "total_count": 0,
        "top_categories": []
    }
