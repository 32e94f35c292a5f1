import pytest

from preplanner.agent.normalize import (
    LIST_FIELDS,
    coerce_files,
    coerce_str_list,
    normalize_plan,
    normalize_steps,
    proposed_prompt,
)


@pytest.mark.parametrize(
    "value",
    [None, "a single string", 7, {"nested": ["x"]}, True, 3.2],
)
def test_non_sequence_list_fields_become_empty(value):
    data = {field: value for field in LIST_FIELDS}
    plan = normalize_plan(data, "raw")
    for field in LIST_FIELDS:
        assert getattr(plan, field) == []


def test_list_elements_are_stringified():
    assert coerce_str_list(["a", 1, None, {"k": "v"}, [1, 2], True]) == [
        "a",
        "1",
        "null",
        '{"k": "v"}',
        "[1, 2]",
        "true",
    ]


def test_empty_mapping_yields_complete_contract():
    plan = normalize_plan({}, "build me a dashboard")
    dumped = plan.model_dump()
    assert dumped == {
        "proposedPrompt": "build me a dashboard",
        "inScope": [],
        "outOfScope": [],
        "assumptions": [],
        "acceptanceCriteria": [],
        "questions": [],
        "steps": [],
    }


@pytest.mark.parametrize("value", [None, "", "   ", 12, ["x"]])
def test_proposed_prompt_falls_back_to_raw_prompt(value):
    assert proposed_prompt(value, "raw") == "raw"


def test_proposed_prompt_kept_when_usable():
    assert proposed_prompt("refined", "raw") == "refined"


def test_steps_are_bounded_to_ten():
    raw = [{"id": f"x{i}", "title": f"T{i}"} for i in range(25)]
    steps = normalize_steps(raw)
    assert len(steps) == 10
    assert [s.id for s in steps] == [f"x{i}" for i in range(10)]


def test_steps_limit_is_configurable():
    assert len(normalize_steps([{}] * 5, limit=3)) == 3


def test_step_defaults_are_positional():
    steps = normalize_steps([{}, {"id": "custom"}, {"title": "Only title"}, "loose string", None, {"id": "", "title": ""}])
    assert [(s.id, s.title) for s in steps] == [
        ("s1", "Step 1"),
        ("custom", "Step 2"),
        ("s3", "Only title"),
        ("s4", "Step 4"),
        ("s5", "Step 5"),
        ("s6", "Step 6"),
    ]


def test_numeric_step_ids_become_strings():
    steps = normalize_steps([{"id": 3, "title": "Three"}])
    assert steps[0].id == "3"


@pytest.mark.parametrize("value", [None, "steps", {"id": "s1"}, 10])
def test_non_list_steps_become_empty(value):
    assert normalize_steps(value) == []


def test_coerce_files_drops_non_mappings_and_strips_leading_slashes():
    files = coerce_files([
        {"path": "/src/App.tsx", "contents": "export {}"},
        "not a file",
        {"path": "src/b.ts"},
        {"contents": 5},
    ])
    assert [(f.path, f.contents) for f in files] == [
        ("src/App.tsx", "export {}"),
        ("src/b.ts", ""),
        ("", "5"),
    ]


def test_coerce_files_non_list():
    assert coerce_files({"path": "a"}) == []


def test_steps_limit_never_exceeds_ten():
    assert len(normalize_steps([{}] * 30, limit=25)) == 10
    assert len(normalize_plan({"steps": [{}] * 30}, "raw", max_steps=50).steps) == 10
