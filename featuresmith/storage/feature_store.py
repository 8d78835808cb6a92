"""
Storage for generated features and analytics events.

Uses a single JSON file, written after every change. Features are keyed by
an integer id assigned on creation; analytics events are append-only.
"""

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.models.feature import AnalyticsEvent, Feature


class FeatureStore:
    """
    Manages storage and retrieval of features and analytics events.

    File layout:
    - features: {id: feature}
    - analytics: [event, ...]
    - next_feature_id / next_event_id: id counters
    """

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize the feature store.

        Args:
            storage_path: Path to JSON storage file. Defaults to settings.feature_store_path
        """
        self.storage_path = storage_path or settings.feature_store_path
        self._ensure_storage_exists()

    def _ensure_storage_exists(self):
        """Ensure the storage file (and its directory) exists."""
        if not os.path.exists(self.storage_path) or os.path.getsize(self.storage_path) == 0:
            Path(self.storage_path).parent.mkdir(parents=True, exist_ok=True)
            self._save_data(self._empty())
            logger.info(f"Created feature storage at {self.storage_path}")

    @staticmethod
    def _empty() -> Dict[str, Any]:
        return {"features": {}, "analytics": [], "next_feature_id": 1, "next_event_id": 1}

    def _load_data(self) -> Dict[str, Any]:
        """Load everything from storage."""
        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, FileNotFoundError) as e:
            logger.warning(f"Failed to load features: {e}. Starting from empty storage.")
            return self._empty()
        for key, value in self._empty().items():
            data.setdefault(key, value)
        return data

    def _save_data(self, data: Dict[str, Any]):
        """Save everything to storage."""
        try:
            with open(self.storage_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, default=str)
        except OSError as e:
            logger.error(f"Failed to save features: {e}")
            raise

    # ------------------------------------------------------------------ #
    # Features
    # ------------------------------------------------------------------ #

    def create_feature(
        self, title: str, story: str, scenario_count: int, generated_content: str
    ) -> Feature:
        """
        Persist a new feature.

        Returns:
            The stored Feature with its assigned id
        """
        data = self._load_data()
        feature = Feature(
            id=data["next_feature_id"],
            title=title,
            story=story,
            scenario_count=scenario_count,
            generated_content=generated_content,
        )
        data["features"][str(feature.id)] = feature.model_dump(mode='json', by_alias=True)
        data["next_feature_id"] = feature.id + 1
        self._save_data(data)
        logger.info(f"Saved feature {feature.id}: {title}")
        return feature

    def get_feature(self, feature_id: int) -> Optional[Feature]:
        """Retrieve a feature by id, or None if not found."""
        raw = self._load_data()["features"].get(str(feature_id))
        return Feature.model_validate(raw) if raw else None

    def list_features(self) -> List[Feature]:
        """All features ordered by id."""
        features = [Feature.model_validate(raw) for raw in self._load_data()["features"].values()]
        return sorted(features, key=lambda feature: feature.id)

    def update_feature(self, feature_id: int, **changes) -> Optional[Feature]:
        """
        Apply field changes (python field names) to a stored feature.

        Returns:
            Updated Feature, or None if the feature does not exist
        """
        data = self._load_data()
        raw = data["features"].get(str(feature_id))
        if not raw:
            logger.warning(f"Feature {feature_id} not found for update")
            return None

        feature = Feature.model_validate(raw).model_copy(
            update={**changes, "updated_at": datetime.now(timezone.utc)}
        )
        data["features"][str(feature_id)] = feature.model_dump(mode='json', by_alias=True)
        self._save_data(data)
        logger.info(f"Updated feature {feature_id}: {sorted(changes)}")
        return feature

    def find_feature_by_title(self, title: str) -> Optional[Feature]:
        """Case-insensitive exact title match."""
        wanted = title.strip().lower()
        for feature in self.list_features():
            if feature.title.strip().lower() == wanted:
                return feature
        return None

    # ------------------------------------------------------------------ #
    # Analytics
    # ------------------------------------------------------------------ #

    def log_analytics_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        """Append an analytics event and return it with its id."""
        data = self._load_data()
        stored = event.model_copy(update={"id": data["next_event_id"]})
        data["analytics"].append(stored.model_dump(mode='json', by_alias=True))
        data["next_event_id"] = stored.id + 1
        self._save_data(data)
        logger.debug(f"Tracked {stored.event_type} event (successful={stored.successful})")
        return stored

    def get_analytics(self) -> List[AnalyticsEvent]:
        """All analytics events, oldest first."""
        return [AnalyticsEvent.model_validate(raw) for raw in self._load_data()["analytics"]]
