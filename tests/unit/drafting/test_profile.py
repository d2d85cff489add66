"""Unit tests for profile and notes loading."""

import json

import pytest

from cvdraft.drafting.models import CandidateProfile
from cvdraft.drafting.profile import ProfileError, ProfileService

PROFILE_DATA = {
    "personalDetails": {"name": "Alex Morgan"},
    "qualifications": ["BSc"],
    "skills": ["SQL"],
    "achievements": ["Shipped"],
    "pastJobRoles": [{"jobTitle": "Analyst", "from": "2016-09-01", "to": "2021-02-28"}],
}


class TestLoadProfile:
    def test_load_json(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text(json.dumps(PROFILE_DATA), encoding="utf-8")

        profile = ProfileService().load_profile(path)

        assert profile.personal_details["name"] == "Alex Morgan"
        role = profile.past_job_roles[0]
        assert (role.job_title, role.start, role.end) == ("Analyst", "2016-09-01", "2021-02-28")

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "cv.yaml"
        path.write_text(
            "personalDetails:\n  name: Alex Morgan\nskills:\n  - SQL\n"
            "pastJobRoles:\n  - jobTitle: Analyst\n    from: '2016-09-01'\n",
            encoding="utf-8",
        )

        profile = ProfileService().load_profile(path)

        assert profile.skills == ["SQL"]
        assert profile.past_job_roles[0].start == "2016-09-01"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfileError, match="not found"):
            ProfileService().load_profile(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ProfileError, match="Invalid JSON"):
            ProfileService().load_profile(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ProfileError, match="mapping"):
            ProfileService().load_profile(path)

    def test_invalid_shape(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text(json.dumps({"pastJobRoles": [{"from": "2020"}]}), encoding="utf-8")
        with pytest.raises(ProfileError, match="Invalid CV base data"):
            ProfileService().load_profile(path)

    def test_round_trips_camel_case(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text(json.dumps(PROFILE_DATA), encoding="utf-8")

        profile = ProfileService().load_profile(path)

        assert json.loads(profile.to_prompt_json()) == PROFILE_DATA


class TestNotesAndValidation:
    def test_load_notes(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_text("Mention relocation.", encoding="utf-8")
        assert ProfileService().load_notes(path) == "Mention relocation."

    def test_missing_notes(self, tmp_path):
        with pytest.raises(ProfileError):
            ProfileService().load_notes(tmp_path / "notes.md")

    def test_validate_profile_warnings(self):
        warnings = ProfileService().validate_profile(CandidateProfile())
        assert "Skills list is empty" in warnings
        assert "No past job roles" in warnings

    def test_validate_complete_profile(self, sample_profile):
        assert ProfileService().validate_profile(sample_profile) == []


class TestUnreadableFiles:
    def test_notes_not_utf8(self, tmp_path):
        path = tmp_path / "notes.md"
        path.write_bytes(b"\xff\xfe bad")
        with pytest.raises(ProfileError, match="Cannot read"):
            ProfileService().load_notes(path)

    def test_notes_path_is_directory(self, tmp_path):
        with pytest.raises(ProfileError, match="Cannot read"):
            ProfileService().load_notes(tmp_path)

    def test_profile_not_utf8(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(ProfileError):
            ProfileService().load_profile(path)

    def test_yaml_profile_not_utf8(self, tmp_path):
        path = tmp_path / "cv.yaml"
        path.write_bytes(b"skills:\n  - \xff\xfe\n")
        with pytest.raises(ProfileError):
            ProfileService().load_profile(path)

    def test_profile_path_is_directory(self, tmp_path):
        with pytest.raises(ProfileError, match="Cannot read"):
            ProfileService().load_profile(tmp_path)
