"""
Halal certification matcher.

Owns one snapshot of the certification register and answers, per merchant,
whether it appears in that register and via which evidence path.
"""
import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, Sequence
from loguru import logger

from halalmatch.clients import RegisterClient
from halalmatch.config import LOAD_ATTEMPTS, LOAD_TIMEOUT, BACKOFF_BASE
from halalmatch.models import AuthorityEntry, MatchSource, MatchVerdict, MerchantRecord, RegisterState
from halalmatch.register_fetcher import fetch_authority_entries
from halalmatch.matchers.normalizer import normalize, tokenize
from halalmatch.matchers.classical_matcher import (
    FuzzyCandidate,
    is_fuzzy_candidate,
    name_similarity,
    select_best_candidate,
)


class RegisterSnapshot:
    """Immutable view of the register with names normalized once at load time."""

    def __init__(self, entries: Sequence[AuthorityEntry]):
        self.entries = tuple(entries)
        self.clean_names = tuple(normalize(entry.name) for entry in self.entries)
        self.tokens = tuple(tokenize(clean) for clean in self.clean_names)
        by_name: Dict[str, List[int]] = {}
        for idx, clean in enumerate(self.clean_names):
            if clean:
                by_name.setdefault(clean, []).append(idx)
        self._by_name = by_name

    def __len__(self) -> int:
        return len(self.entries)

    def exact_matches(self, clean_name: str) -> List[AuthorityEntry]:
        return [self.entries[idx] for idx in self._by_name.get(clean_name, [])]


class HalalMatcher:
    """
    Match merchants against the halal certification register.

    The register is loaded on first use: up to `attempts` fetches, each bounded
    by `timeout` seconds, with exponential backoff in between. If every attempt
    fails the matcher latches into UNAVAILABLE for its whole lifetime and
    answers REGISTER_UNAVAILABLE without touching the network again.
    """

    def __init__(
        self,
        client: RegisterClient,
        attempts: int = LOAD_ATTEMPTS,
        timeout: float = LOAD_TIMEOUT,
        backoff_base: float = BACKOFF_BASE,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.attempts = attempts
        self.timeout = timeout
        self.backoff_base = backoff_base
        self._sleep = sleep
        self._state = RegisterState.UNINITIALIZED
        self._snapshot = RegisterSnapshot([])
        self._lock = asyncio.Lock()

    @property
    def state(self) -> RegisterState:
        return self._state

    @property
    def register_size(self) -> int:
        return len(self._snapshot)

    def _is_settled(self) -> bool:
        return self._state in (RegisterState.READY, RegisterState.UNAVAILABLE)

    async def ensure_ready(self) -> None:
        """
        Load the register once. Concurrent first callers wait on the same load.
        Never raises; failures end in the UNAVAILABLE state.
        """
        if self._is_settled():
            return
        async with self._lock:
            if self._is_settled():
                return
            self._state = RegisterState.LOADING
            entries = await self._load_with_retries()
            if entries is None:
                self._snapshot = RegisterSnapshot([])
                self._state = RegisterState.UNAVAILABLE
                logger.error(
                    f"❌ Halal register unavailable after {self.attempts} attempts; "
                    f"all checks will report {MatchSource.REGISTER_UNAVAILABLE.value}"
                )
            else:
                self._snapshot = RegisterSnapshot(entries)
                self._state = RegisterState.READY
                logger.info(f"🕌 Loaded {len(entries)} halal establishments")

    async def _load_with_retries(self) -> Optional[List[AuthorityEntry]]:
        for attempt in range(1, self.attempts + 1):
            try:
                logger.debug(f"▶️ Register load attempt {attempt}/{self.attempts}")
                return await asyncio.wait_for(fetch_authority_entries(self.client), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning(f"⏱️ Register load attempt {attempt}/{self.attempts} timed out after {self.timeout}s")
            except Exception as e:
                logger.warning(f"⚠️ Register load attempt {attempt}/{self.attempts} failed: {e}")

            if attempt < self.attempts:
                delay = self.backoff_base * 2 ** (attempt - 1)
                logger.debug(f"Retrying register load in {delay}s")
                await self._sleep(delay)
        return None

    def _match_loaded(self, merchant: MerchantRecord) -> MatchVerdict:
        clean_merchant = normalize(merchant.name)
        if not clean_merchant:
            return MatchVerdict.not_found()
        postal = merchant.postal_code or ""

        # Exact pass
        exact = self._snapshot.exact_matches(clean_merchant)
        if exact:
            for entry in exact:
                if postal and entry.postal_code == postal:
                    return MatchVerdict.matched(MatchSource.EXACT_NAME_POSTAL, entry)
            return MatchVerdict.matched(MatchSource.EXACT_NAME, exact[0])

        # Fuzzy pass
        merchant_tokens = tokenize(clean_merchant)
        candidates = []
        for entry, entry_tokens in zip(self._snapshot.entries, self._snapshot.tokens):
            similarity, matching = name_similarity(merchant_tokens, entry_tokens)
            if is_fuzzy_candidate(similarity, matching, len(merchant_tokens)):
                candidates.append(FuzzyCandidate(
                    entry=entry,
                    similarity=similarity,
                    postal_match=bool(postal) and entry.postal_code == postal,
                ))

        best = select_best_candidate(candidates)
        if best is None:
            return MatchVerdict.not_found()
        source = MatchSource.SIMILAR_NAME_POSTAL if best.postal_match else MatchSource.SIMILAR_NAME
        return MatchVerdict.matched(source, best.entry)

    async def is_halal_certified(self, merchant: MerchantRecord) -> MatchVerdict:
        """
        Check one merchant against the register.

        Args:
            merchant (MerchantRecord): Merchant to check.

        Returns:
            MatchVerdict: Verdict with evidence source; REGISTER_UNAVAILABLE if the
                          register could not be loaded.
        """
        await self.ensure_ready()
        if self._state is RegisterState.UNAVAILABLE:
            return MatchVerdict.unavailable()
        verdict = self._match_loaded(merchant)
        logger.debug(f"'{merchant.name}' ({merchant.postal_code}) → {verdict.source.value}")
        return verdict

    async def match_many(self, merchants: Sequence[MerchantRecord]) -> List[MatchVerdict]:
        """Check a batch of merchants against a single register snapshot."""
        await self.ensure_ready()
        if self._state is RegisterState.UNAVAILABLE:
            return [MatchVerdict.unavailable() for _ in merchants]
        return [self._match_loaded(merchant) for merchant in merchants]
