from typing import Dict, Iterable, List, Mapping, Optional

from safescan.core.rules import DENYLISTS
from safescan.models import Profile, Verdict


class VerdictEvaluator:
    """Matches a profile's denylist against free-text ingredients.

    Matching is plain substring containment on lower-cased text, so "egg"
    also matches "eggplant". Matches come back in denylist order.
    """

    def __init__(self, denylists: Optional[Mapping[Profile, Iterable[str]]] = None):
        source = denylists if denylists is not None else {Profile(k): v for k, v in DENYLISTS.items()}
        self._denylists: Dict[Profile, tuple] = {
            Profile(profile): tuple(token.lower() for token in tokens)
            for profile, tokens in source.items()
        }

    def profiles(self) -> List[Profile]:
        return list(self._denylists)

    def denylist(self, profile: Profile) -> List[str]:
        return list(self._denylists.get(Profile(profile), ()))

    def evaluate(self, profile: Profile, ingredients_text: Optional[str]) -> Verdict:
        profile = Profile(profile)
        text = (ingredients_text or "").lower()
        matched = [token for token in self._denylists.get(profile, ()) if token in text]
        return Verdict(profile=profile, matched=matched)

