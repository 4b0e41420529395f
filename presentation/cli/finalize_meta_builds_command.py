from __future__ import annotations

from config.settings import settings
from core.logging.logger import get_logger
from application.use_cases import FinalizeMetaBuildsUseCase


class FinalizeMetaBuildsCommand:
    """Full cache rescan into the ranked and casual meta-build files."""

    def __init__(self, s=settings) -> None:
        self.s = s
        self._log = get_logger(__name__, service="finalize-cli")

    @staticmethod
    def _count_lists(doc: dict) -> int:
        return sum(
            len(roles)
            for champions in doc.get("patches", {}).values()
            for roles in champions.values()
        )

    def run(self) -> None:
        self.s.create_directories()
        self._log.info(lambda: f"start {self.s.describe()}")
        use_case = FinalizeMetaBuildsUseCase(self.s)
        ranked, casual = use_case.execute()

        print("\n" + "=" * 57)
        print("FINALIZE SUMMARY")
        print("=" * 57)
        print(f"Cache files scanned: {use_case.stats.files_seen} (unreadable {use_case.stats.unparseable})")
        print(f"Matches counted:     {use_case.stats.matches_counted}")
        print(f"Ranked lists:        {self._count_lists(ranked)} -> {self.s.OUT_RANKED_PATH}")
        print(f"Casual lists:        {self._count_lists(casual)} -> {self.s.OUT_CASUAL_PATH}")
        print("=" * 57)
        self._log.success("meta builds finalized")
