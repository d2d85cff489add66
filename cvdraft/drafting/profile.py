"""Candidate profile and covering-letter notes loading."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from cvdraft.drafting.models import CandidateProfile


class ProfileError(Exception):
    """Raised when the CV base data or notes cannot be loaded."""


class ProfileService:
    """Service for loading the candidate's CV base data."""

    def load_profile(self, path: Path | str) -> CandidateProfile:
        """Load and validate a profile from JSON or YAML."""
        profile_path = Path(path)
        if not profile_path.exists():
            raise ProfileError(f"CV base data not found: {profile_path}")

        suffix = profile_path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            data = self._load_yaml(profile_path)
        else:
            data = self._load_json(profile_path)

        try:
            return CandidateProfile.model_validate(data)
        except ValidationError as e:
            raise ProfileError(f"Invalid CV base data in {profile_path}: {e}") from e

    def load_notes(self, path: Path | str) -> str:
        """Read free-form covering letter notes."""
        notes_path = Path(path)
        if not notes_path.exists():
            raise ProfileError(f"Covering letter notes not found: {notes_path}")
        try:
            return notes_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileError(f"Cannot read covering letter notes: {notes_path}") from e

    def validate_profile(self, profile: CandidateProfile) -> list[str]:
        """Return warnings for incomplete profiles."""
        warnings: list[str] = []

        if not profile.personal_details:
            warnings.append("Personal details are empty")
        if not profile.skills:
            warnings.append("Skills list is empty")
        if not profile.past_job_roles:
            warnings.append("No past job roles")

        return warnings

    def _load_yaml(self, path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ProfileError(f"Invalid YAML profile: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileError(f"Cannot read profile: {path}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ProfileError(f"Profile must be a mapping/dict: {path}")
        return data

    def _load_json(self, path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ProfileError(f"Invalid JSON profile: {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ProfileError(f"Cannot read profile: {path}") from e

        if not isinstance(data, dict):
            raise ProfileError(f"Profile must be a mapping/dict: {path}")
        return data
