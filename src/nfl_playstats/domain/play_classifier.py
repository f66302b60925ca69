# src/nfl_playstats/domain/play_classifier.py

"""
Play classifier
Maps free-text play-by-play descriptions to a closed set of play-type tags and
decides down-and-distance success. Keyword rules live in
config/play_type_rules.yaml and are applied first-match-wins in a fixed order.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
import yaml

from .entities import Play, PlayType
from ..config.constants import (
    FIRST_DOWN_SUCCESS_THRESHOLD, SECOND_DOWN_SUCCESS_THRESHOLD,
    CONVERSION_SUCCESS_THRESHOLD
)

logger = logging.getLogger(__name__)

RULES_PATH = Path(__file__).parent.parent / "config" / "play_type_rules.yaml"


def _contains_any(text: str, keywords: List[str]) -> bool:
    return any(keyword in text for keyword in keywords)


class PlayClassifier:
    """Rule-based play-type tagging and success determination."""

    _rules = None

    @classmethod
    def _load_rules(cls) -> Dict[str, Any]:
        """Load keyword rules from YAML file."""
        if cls._rules is None:
            with open(RULES_PATH, 'r') as f:
                rules = yaml.safe_load(f)
            cls._validate_rules(rules)
            cls._rules = rules
            logger.debug("Loaded play-type rules from YAML file")
        return cls._rules

    @staticmethod
    def _validate_rules(rules: Dict[str, Any]) -> None:
        """Every tag a rule can emit must belong to the PlayType vocabulary."""
        known = PlayType.values()
        tags = [rule['tag'] for rule in rules['special_teams']]
        tags += [rule['tag'] for rule in rules['pressure']]
        tags += [rule['tag'] for rule in rules['rush']]
        penalty = rules['penalty']
        tags += [penalty['offense_tag'], penalty['defense_tag'], penalty['default_tag']]
        tags.append(rules['fallback'])

        pass_rules = rules['pass']
        directions = [d['direction'] for d in pass_rules['directions']] + [pass_rules['default_direction']]
        for direction in directions:
            tags.append(f"pass-screen-{direction}")
            tags.append(f"pass-deep-{direction}")
            tags.append(f"pass-{pass_rules['default_depth']}-{direction}")

        unknown = sorted(set(tags) - known)
        if unknown:
            raise ValueError(f"Play-type rules reference unknown tags: {', '.join(unknown)}")

    @classmethod
    def classify_play_type(cls, description: Optional[str]) -> str:
        """Return the play-type tag for a description.

        Rules are checked in priority order and the first match wins:
        special teams, penalties, sacks/scrambles, passes, rushes, then
        ``other``. Descriptions with several keywords resolve by that order,
        not by any notion of best match.
        """
        text = (description or "").lower()
        if not text:
            return PlayType.OTHER.value

        rules = cls._load_rules()

        for rule in rules['special_teams']:
            if _contains_any(text, rule['keywords']):
                return rule['tag']

        penalty = rules['penalty']
        if _contains_any(text, penalty['keywords']):
            if _contains_any(text, penalty['offense_keywords']):
                return penalty['offense_tag']
            if _contains_any(text, penalty['defense_keywords']):
                return penalty['defense_tag']
            return penalty['default_tag']

        for rule in rules['pressure']:
            if _contains_any(text, rule['keywords']):
                return rule['tag']

        pass_rules = rules['pass']
        if _contains_any(text, pass_rules['keywords']):
            return cls._classify_pass(text, pass_rules)

        for rule in rules['rush']:
            if _contains_any(text, rule['keywords']):
                return rule['tag']

        return rules['fallback']

    @staticmethod
    def _classify_pass(text: str, pass_rules: Dict[str, Any]) -> str:
        depth = 'deep' if _contains_any(text, pass_rules['deep_keywords']) else pass_rules['default_depth']

        direction = pass_rules['default_direction']
        for candidate in pass_rules['directions']:
            if _contains_any(text, candidate['keywords']):
                direction = candidate['direction']
                break

        if _contains_any(text, pass_rules['screen_keywords']):
            return f"pass-screen-{direction}"
        return f"pass-{depth}-{direction}"

    @staticmethod
    def compute_success(down: Optional[int], distance: Optional[int],
                        yards_gained: Optional[int]) -> Optional[bool]:
        """Decide whether a play was successful for its down and distance.

        - 1st down: gain >= 40% of yards to go
        - 2nd down: gain >= 60% of yards to go
        - 3rd/4th down: gain >= 100% of yards to go

        Returns None (unknown, distinct from False) when any input is missing
        or the down is outside 1-4. Zero yards to go counts as known. The
        comparison is not rounded.
        """
        if down is None or distance is None or yards_gained is None:
            return None

        if down == 1:
            return yards_gained >= FIRST_DOWN_SUCCESS_THRESHOLD * distance
        if down == 2:
            return yards_gained >= SECOND_DOWN_SUCCESS_THRESHOLD * distance
        if down in (3, 4):
            return yards_gained >= CONVERSION_SUCCESS_THRESHOLD * distance

        return None

    @staticmethod
    def compute_success_series(plays: pd.DataFrame) -> pd.Series:
        """Vectorized compute_success over 'down', 'distance' and 'result_yards' columns."""
        if len(plays) == 0:
            return pd.Series([], dtype=object)

        down = pd.to_numeric(plays['down'], errors='coerce')
        distance = pd.to_numeric(plays['distance'], errors='coerce')
        yards = pd.to_numeric(plays['result_yards'], errors='coerce')

        success_mask = np.where(
            down == 1,
            yards >= FIRST_DOWN_SUCCESS_THRESHOLD * distance,
            np.where(
                down == 2,
                yards >= SECOND_DOWN_SUCCESS_THRESHOLD * distance,
                yards >= CONVERSION_SUCCESS_THRESHOLD * distance
            )
        )

        evaluable = down.isin([1, 2, 3, 4]) & distance.notna() & yards.notna()
        result = pd.Series(success_mask, index=plays.index, dtype=object)
        result[~evaluable] = None
        return result

    @staticmethod
    def derive_flags(play_type: str, description: Optional[str], down: Optional[int],
                     distance: Optional[int], yards_gained: Optional[int],
                     success: Optional[bool]) -> Dict[str, bool]:
        """Derive the boolean flags consumed by aggregation."""
        text = (description or "").lower()
        tag = PlayType(play_type) if play_type in PlayType.values() else PlayType.OTHER

        is_pass = tag.is_pass
        is_run = tag.is_run
        is_sack = tag is PlayType.PASS_SACK
        is_interception = is_pass and 'intercepted' in text

        is_first_down = False
        if (is_pass or is_run) and not is_interception:
            gained_distance = (
                distance is not None and yards_gained is not None and yards_gained >= distance
            )
            is_first_down = gained_distance or 'touchdown' in text

        return {
            'is_pass': is_pass,
            'is_run': is_run,
            'is_sack': is_sack,
            'is_scramble': tag is PlayType.QB_SCRAMBLE,
            'is_first_down': is_first_down,
            'is_interception': is_interception,
            'is_stop': (is_pass or is_run or is_sack) and success is False,
            'shotgun': 'shotgun' in text,
            'no_huddle': 'no huddle' in text,
        }

    @classmethod
    def classify_play(cls, game_id: Optional[int], play_id: Optional[int], description: Optional[str],
                      down: Optional[int] = None, distance: Optional[int] = None,
                      result_yards: Optional[int] = None, **context) -> Play:
        """Build a fully classified Play from raw feed values."""
        play_type = cls.classify_play_type(description)
        success = cls.compute_success(down, distance, result_yards)
        flags = cls.derive_flags(play_type, description, down, distance, result_yards, success)

        return Play(
            game_id=game_id,
            play_id=play_id,
            description=description or "",
            down=down,
            distance=distance,
            result_yards=result_yards,
            play_type=play_type,
            success=success,
            **flags,
            **context
        )


def classify_play_type(description: Optional[str]) -> str:
    """Module-level shortcut for PlayClassifier.classify_play_type."""
    return PlayClassifier.classify_play_type(description)


def compute_success(down: Optional[int], distance: Optional[int],
                    yards_gained: Optional[int]) -> Optional[bool]:
    """Module-level shortcut for PlayClassifier.compute_success."""
    return PlayClassifier.compute_success(down, distance, yards_gained)
