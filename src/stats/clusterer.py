from collections import Counter
from typing import List, Optional, Sequence

from loguru import logger

from src.models.enums import NamingPolicy, SimilarityLevel
from src.models.identity import ConsolidatedIdentity, Identity
from src.utils.text_utils import compare_two_strings, comparison_key


class SimilarityClusterer:
    """Merges identities whose names are near-duplicates of each other.

    Clustering is greedy and keeps the incoming order: each identity not yet
    assigned seeds a new cluster, and every later unassigned identity whose
    comparison key scores at or above the threshold against the *seed* joins
    it. Members are never compared with each other, so similarity does not
    chain through a cluster.
    """

    def __init__(
        self,
        level: SimilarityLevel = SimilarityLevel.MODERATE,
        naming_policy: NamingPolicy = NamingPolicy.MOST_FREQUENT_VARIATION,
        min_attendance: Optional[int] = None,
    ):
        self.level = level
        self.threshold = level.threshold
        self.naming_policy = naming_policy
        self.min_attendance = min_attendance

    def cluster(self, identities: Sequence[Identity]) -> List[List[Identity]]:
        """Groups identities into clusters, seeds in incoming order."""
        keys = [comparison_key(identity.canonical_name) for identity in identities]
        assigned = [False] * len(identities)
        clusters: List[List[Identity]] = []

        for index, seed in enumerate(identities):
            if assigned[index]:
                continue
            assigned[index] = True
            group = [seed]

            for other_index in range(index + 1, len(identities)):
                if assigned[other_index]:
                    continue
                similarity = compare_two_strings(keys[index], keys[other_index])
                if similarity >= self.threshold:
                    assigned[other_index] = True
                    group.append(identities[other_index])
                    logger.debug(
                        f"Merging '{identities[other_index].canonical_name}' into "
                        f"'{seed.canonical_name}' (similarity {similarity:.2f})"
                    )

            clusters.append(group)

        return clusters

    def consolidate(self, identities: Sequence[Identity]) -> List[ConsolidatedIdentity]:
        """Clusters, merges, optionally filters and ranks the identities."""
        logger.info(
            f"Consolidating {len(identities)} players at {self.level.value.lower()} similarity "
            f"(threshold {self.threshold:.2f})"
        )
        consolidated = [self.merge(group) for group in self.cluster(identities)]

        if self.min_attendance is not None:
            before = len(consolidated)
            consolidated = [c for c in consolidated if c.total_attendance >= self.min_attendance]
            logger.info(
                f"Kept {len(consolidated)} of {before} players with "
                f"{self.min_attendance}+ attendances."
            )

        ranked = sorted(consolidated, key=lambda c: -c.total_attendance)
        logger.info(
            f"Consolidated into {len(ranked)} players "
            f"({len(identities) - len(ranked)} merged or filtered out)."
        )
        return ranked

    def merge(self, group: Sequence[Identity]) -> ConsolidatedIdentity:
        all_variations: List[str] = []
        events: List[str] = []
        total = 0

        for identity in group:
            total += identity.attendance_count
            all_variations.extend(identity.variations or [identity.canonical_name])
            for event_key in identity.events:
                if event_key not in events:
                    events.append(event_key)

        unique_variations = list(dict.fromkeys(all_variations))

        return ConsolidatedIdentity(
            name=self._choose_name(group, all_variations, unique_variations),
            total_attendance=total,
            variations=unique_variations,
            members=[identity.canonical_name for identity in group],
            events=events,
        )

    def _choose_name(
        self,
        group: Sequence[Identity],
        all_variations: List[str],
        unique_variations: List[str],
    ) -> str:
        if self.naming_policy == NamingPolicy.SEED_NAME:
            return group[0].canonical_name
        counts = Counter(all_variations)
        # max() returns the first maximal element, so ties go to the earliest variation
        return max(unique_variations, key=lambda variation: counts[variation])
