from .ladder_bootstrap_service import (
    LadderBootstrapService,
    parse_match_ids_from_urls,
    seed_match_ids,
)

__all__ = ["LadderBootstrapService", "parse_match_ids_from_urls", "seed_match_ids"]
