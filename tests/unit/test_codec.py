"""Unit tests for the JSON storage codec."""

import json

import pytest

from project_tracker.codec import decode, encode
from project_tracker.errors import MalformedDataError
from project_tracker.models import Project, Task


@pytest.fixture
def sample_projects():
    return [
        Project("Alpha", [Task(1, "write spec", True), Task(2, "implement")]),
        Project("Beta", []),
        Project("Ünïcode ✓", [Task(7, "naïve café")]),
    ]


class TestDecodeEmpty:
    """The empty document is the first-run state."""

    def test_empty_string(self):
        assert decode("") == []

    def test_empty_bytes(self):
        assert decode(b"") == []

    def test_whitespace_is_not_empty(self):
        """Only a zero-length document counts as empty."""
        with pytest.raises(MalformedDataError, match="Unable to parse"):
            decode("  \n")


class TestDecode:
    """Test cases for decoding well-formed documents."""

    def test_decode_document(self):
        raw = json.dumps([
            {"name": "Alpha", "tasks": [{"id": 1, "description": "write spec", "completed": False}]}
        ])

        assert decode(raw) == [Project("Alpha", [Task(1, "write spec", False)])]

    def test_decode_empty_array(self):
        assert decode("[]") == []

    def test_decode_bytes(self):
        raw = '[{"name": "Café", "tasks": []}]'.encode("utf-8")

        assert decode(raw) == [Project("Café", [])]

    def test_extra_keys_are_ignored(self):
        raw = json.dumps([
            {"name": "Alpha", "color": "red", "tasks": [
                {"id": 1, "description": "x", "completed": True, "due": "tomorrow"}
            ]}
        ])

        assert decode(raw) == [Project("Alpha", [Task(1, "x", True)])]

    def test_out_of_order_ids_are_accepted(self):
        raw = json.dumps([{"name": "Alpha", "tasks": [
            {"id": 1, "description": "a", "completed": False},
            {"id": 3, "description": "b", "completed": False},
            {"id": 2, "description": "c", "completed": True},
        ]}])

        assert [task.id for task in decode(raw)[0].tasks] == [1, 3, 2]


class TestDecodeMalformed:
    """Anything that is not the expected shape is a MalformedDataError."""

    @pytest.mark.parametrize(
        "raw, message",
        [
            ('[{"name": "Alpha", "tasks": [', "Unable to parse"),
            ('{"name": "Alpha", "tasks": []}', "Expected an array of projects"),
            ('["Alpha"]', "project #0: expected an object"),
            ('[{"tasks": []}]', "missing field 'name'"),
            ('[{"name": 5, "tasks": []}]', "field 'name' must be a string"),
            ('[{"name": "Alpha"}]', "missing field 'tasks'"),
            ('[{"name": "Alpha", "tasks": {}}]', "field 'tasks' must be an array"),
            ('[{"name": "Alpha", "tasks": [3]}]', "task #0: expected an object"),
            ('[{"name": "Alpha", "tasks": [{"description": "x", "completed": false}]}]', "field 'id' must be an integer"),
            ('[{"name": "Alpha", "tasks": [{"id": "1", "description": "x", "completed": false}]}]', "field 'id' must be an integer"),
            ('[{"name": "Alpha", "tasks": [{"id": 1.5, "description": "x", "completed": false}]}]', "field 'id' must be an integer"),
            ('[{"name": "Alpha", "tasks": [{"id": true, "description": "x", "completed": false}]}]', "field 'id' must be an integer"),
            ('[{"name": "Alpha", "tasks": [{"id": -1, "description": "x", "completed": false}]}]', "negative"),
            ('[{"name": "Alpha", "tasks": [{"id": 1, "completed": false}]}]', "missing field 'description'"),
            ('[{"name": "Alpha", "tasks": [{"id": 1, "description": "x", "completed": 0}]}]', "field 'completed' must be a boolean"),
        ],
    )
    def test_malformed_documents(self, raw, message):
        with pytest.raises(MalformedDataError, match=message):
            decode(raw)

    def test_invalid_utf8(self):
        with pytest.raises(MalformedDataError, match="not valid UTF-8"):
            decode(b"\xff\xfe[]")

    def test_duplicate_project_names(self):
        raw = '[{"name": "Alpha", "tasks": []}, {"name": "Alpha", "tasks": []}]'

        with pytest.raises(MalformedDataError, match="Duplicate project name 'Alpha'"):
            decode(raw)

    def test_duplicate_task_ids(self):
        raw = json.dumps([{"name": "Alpha", "tasks": [
            {"id": 1, "description": "a", "completed": False},
            {"id": 1, "description": "b", "completed": False},
        ]}])

        with pytest.raises(MalformedDataError, match="Duplicate task id 1"):
            decode(raw)

    def test_deeply_nested_document(self):
        raw = "[" * 100000 + "]" * 100000

        with pytest.raises(MalformedDataError, match="nested too deeply"):
            decode(raw)

    @pytest.mark.parametrize(
        "raw",
        [
            '[{"name": "Alpha", "name": "Beta", "tasks": []}]',
            '[{"name": "Alpha", "tasks": [{"id": 1, "id": 2, "description": "x", "completed": false}]}]',
        ],
    )
    def test_duplicate_fields(self, raw):
        with pytest.raises(MalformedDataError, match="Duplicate field"):
            decode(raw)

    def test_error_names_the_project(self):
        raw = '[{"name": "Alpha", "tasks": [{"id": 1, "description": 2, "completed": false}]}]'

        with pytest.raises(MalformedDataError, match="project 'Alpha', task #0"):
            decode(raw)


class TestEncode:
    """Test cases for encoding collections."""

    def test_encode_is_indented_with_stable_key_order(self):
        text = encode([Project("Alpha", [Task(1, "write spec")])])

        assert text == (
            "[\n"
            "  {\n"
            '    "name": "Alpha",\n'
            '    "tasks": [\n'
            "      {\n"
            '        "id": 1,\n'
            '        "description": "write spec",\n'
            '        "completed": false\n'
            "      }\n"
            "    ]\n"
            "  }\n"
            "]"
        )

    def test_encode_empty_collection(self):
        assert encode([]) == "[]"

    def test_encode_keeps_unicode(self):
        assert "naïve café" in encode([Project("P", [Task(1, "naïve café")])])

    def test_round_trip(self, sample_projects):
        assert decode(encode(sample_projects)) == sample_projects

    def test_encode_is_deterministic(self, sample_projects):
        assert encode(sample_projects) == encode(decode(encode(sample_projects)))
