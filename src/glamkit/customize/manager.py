"""
Concurrent construction of customization sets for every clan and gender.

Building happens in two phases on a thread pool: one task creates the
shared `CustomizeSetFactory`, then one task per (clan, gender) pair
creates that pair's set and stores it at its own slot of a pre-sized
list. `CustomizeManager.awaiter` completes once every set is stored;
`get_set` waits on it, so callers see a synchronous API and never a
partially built list.
"""

import logging
import threading
import time
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, Tuple

from PIL import Image

from ..game_data.enums import Gender, Race, SubRace
from ..game_data.icons import IconStorage
from ..game_data.npcs import NpcCustomizeSet
from ..game_data.sources import GameDataSource
from .factory import CustomizeSetFactory
from .models import CustomizeSet, InvalidCustomizationError

if TYPE_CHECKING:
    from ..settings import AppSettings

RACES: Tuple[Race, ...] = tuple(r for r in Race if r is not Race.UNKNOWN)
"""All races except Unknown."""

CLANS: Tuple[SubRace, ...] = tuple(c for c in SubRace if c is not SubRace.UNKNOWN)
"""All clans except Unknown."""

GENDERS: Tuple[Gender, ...] = (Gender.MALE, Gender.FEMALE)
"""Genders that have their own sets."""

LIST_SIZE = len(CLANS) * len(GENDERS)


def all_sets(clans: Sequence[SubRace] = CLANS) -> Iterator[Tuple[SubRace, Gender]]:
    """Iterate over all supported clan and gender pairs in index order."""
    for clan in clans:
        yield clan, Gender.MALE
        yield clan, Gender.FEMALE


def to_index(clan: SubRace, gender: Gender, list_size: int = LIST_SIZE) -> int:
    """Slot of a clan and gender pair in the set list.

    Raises:
        InvalidCustomizationError: if the pair has no slot.
    """
    idx = (int(clan) - 1) * len(GENDERS) + (1 if gender == Gender.FEMALE else 0)
    if idx < 0 or idx >= list_size:
        raise InvalidCustomizationError(
            f"Invalid customization requested for "
            f"{getattr(clan, 'name', clan)} {getattr(gender, 'name', gender)}."
        )
    return idx


def when_all(futures: Sequence[Future]) -> Future:
    """Future that completes when all given futures succeed.

    Fails with the first error (or cancellation) seen among them.
    """
    combined: Future = Future()
    if not futures:
        combined.set_result(None)
        return combined

    remaining = len(futures)
    lock = threading.Lock()

    def _on_done(future: Future) -> None:
        nonlocal remaining
        error = CancelledError() if future.cancelled() else future.exception()
        with lock:
            if combined.done():
                return
            if error is not None:
                combined.set_exception(error)
                return
            remaining -= 1
            if remaining == 0:
                combined.set_result(None)

    for future in futures:
        future.add_done_callback(_on_done)
    return combined


class CustomizeManager:
    """Generate and serve customization sets per clan and gender.

    Construction returns immediately; the sets are built in the
    background. Any method that reads sets blocks until `awaiter` is done.
    """

    def __init__(
        self,
        game_data: GameDataSource,
        npc_customize_set: NpcCustomizeSet,
        icons: Optional[IconStorage] = None,
        *,
        executor: Optional[Executor] = None,
        max_workers: Optional[int] = None,
        clans: Sequence[SubRace] = CLANS,
    ):
        """Start building.

        Args:
            game_data: Sheet provider for the factory.
            npc_customize_set: NPC appearances for marking NPC-only values.
            icons: Icon storage; created over the game data root if omitted.
            executor: Worker pool to run on. If omitted the manager creates
                its own and shuts it down once building is finished.
            max_workers: Pool size for an owned executor.
            clans: Clans to build, a leading run of `CLANS`.
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._clans = tuple(clans)
        if not self._clans or self._clans != CLANS[: len(self._clans)]:
            raise ValueError("clans must be a non-empty leading run of CLANS")

        self._list_size = len(self._clans) * len(GENDERS)
        self._icons = icons if icons is not None else IconStorage(game_data.root)
        self._customization_sets: List[Optional[CustomizeSet]] = [None] * self._list_size

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="customize"
        )
        self._started = time.perf_counter()
        self.logger.info(f"Building {self._list_size} customization sets...")

        factory_task = self._executor.submit(
            CustomizeSetFactory, game_data, self.logger, self._icons, npc_customize_set
        )
        set_tasks = [
            self._executor.submit(self._build_set, factory_task, clan, gender)
            for clan, gender in all_sets(self._clans)
        ]
        self.awaiter: Future = when_all(set_tasks)
        self.awaiter.add_done_callback(self._on_build_done)

    @classmethod
    def from_settings(cls, settings: "AppSettings") -> "CustomizeManager":
        """Create a manager over the game data export configured in settings."""
        from ..settings.types import ConfigError

        if settings.game_data_path is None or settings.npc_table_path is None:
            raise ConfigError("Game data path is not configured")
        game_data = GameDataSource(settings.game_data_path)
        npcs = NpcCustomizeSet.load(settings.npc_table_path)
        return cls(game_data, npcs, max_workers=settings.max_workers)

    def _build_set(
        self, factory_task: "Future[CustomizeSetFactory]", clan: SubRace, gender: Gender
    ) -> None:
        factory = factory_task.result()
        self._customization_sets[to_index(clan, gender, self._list_size)] = factory.create_set(
            clan, gender
        )

    def _on_build_done(self, future: Future) -> None:
        elapsed = time.perf_counter() - self._started
        error = None if future.cancelled() else future.exception()
        if error is not None:
            self.logger.error(f"Customization set build failed after {elapsed:.2f}s: {error}")
        else:
            self.logger.info(f"Built {self._list_size} customization sets in {elapsed:.2f}s")

        if self._owns_executor:
            self._executor.shutdown(wait=False)

    # Public API

    @property
    def clans(self) -> Tuple[SubRace, ...]:
        return self._clans

    @property
    def is_ready(self) -> bool:
        """Whether every set has been built successfully."""
        return self.awaiter.done() and not self.awaiter.cancelled() and self.awaiter.exception() is None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until building is finished; re-raises a build failure.

        Raises:
            TimeoutError: if `timeout` seconds pass first.
        """
        self.awaiter.result(timeout=timeout)

    def get_set(
        self, clan: SubRace, gender: Gender, timeout: Optional[float] = None
    ) -> CustomizeSet:
        """Every clan and gender has a separate set of available customizations.

        Raises:
            InvalidCustomizationError: for pairs without a set.
        """
        idx = to_index(clan, gender, self._list_size)
        if not self.awaiter.done():
            self.wait(timeout)
        else:
            # Finished already; surfaces a failed build without blocking.
            self.awaiter.result()

        result = self._customization_sets[idx]
        if result is None:
            raise InvalidCustomizationError(
                f"Customization set for {clan.name} {gender.name} was not built."
            )
        return result

    def get_icon(self, icon_id: int) -> Optional[Image.Image]:
        """Get specific icons."""
        return self._icons.load_icon(icon_id)

    def all_sets(self) -> Iterator[Tuple[SubRace, Gender]]:
        return all_sets(self._clans)
