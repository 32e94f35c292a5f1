import json

import pytest

from preplanner.llm.json_parse import try_extract_structured


def test_plain_object_round_trips():
    text = '{"proposedPrompt": "x", "steps": [{"id": "s1", "title": "A"}], "n": 1.5, "ok": true}'
    assert try_extract_structured(text) == {
        "proposedPrompt": "x",
        "steps": [{"id": "s1", "title": "A"}],
        "n": 1.5,
        "ok": True,
    }


def test_fenced_block_is_recovered():
    assert try_extract_structured('```json\n{"a":1}\n```') == {"a": 1}


def test_fenced_block_with_surrounding_prose_and_upper_case_tag():
    text = 'Sure! Here it is:\n```JSON\n{"status": "ok",\n "files": []}\n```\nLet me know.'
    assert try_extract_structured(text) == {"status": "ok", "files": []}


@pytest.mark.parametrize("text", ["not json at all", "", "   ", None, "```json\n{broken\n```", "{'a': 1}"])
def test_garbage_degrades_to_empty_mapping(text):
    assert try_extract_structured(text) == {}


@pytest.mark.parametrize("text", ["[1, 2, 3]", "42", '"just a string"', "null"])
def test_non_object_json_is_treated_as_no_data(text):
    assert try_extract_structured(text) == {}


def test_fenced_object_after_leading_noise():
    text = '[1]\n```json\n{"a": [1]}\n```'
    assert try_extract_structured(text) == {"a": [1]}


def test_extraction_is_idempotent():
    text = 'prefix ```json {"steps": [1, 2]} ``` suffix'
    first = try_extract_structured(text)
    second = try_extract_structured(text)
    assert first == second == {"steps": [1, 2]}


def test_fenced_reply_whose_file_contents_hold_fences():
    body = json.dumps({
        "status": "ok",
        "files": [{"path": "README.md", "contents": "Run:\n```bash\nnpm i\n```\n"}],
    })
    text = "```json\n" + body + "\n```"

    out = try_extract_structured(text)

    assert out["status"] == "ok"
    assert out["files"][0]["contents"] == "Run:\n```bash\nnpm i\n```\n"
