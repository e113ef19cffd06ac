import logging
import math
import random
import threading
from collections import deque, namedtuple
from typing import Any, Deque, List, Optional, Tuple

from pong.models import ENDED, LOBBY, PLAYING, MatchState
from . import physics
from .errors import CapacityExceeded, InvalidIntent, MatchError
from .registry import SessionRegistry
from .settings import MatchSettings
from .timers import OneShotTimer, PeriodicTimer


# An event for the transport to deliver; ``to`` is a session id or None for everyone
Outbound = namedtuple('Outbound', ['name', 'payload', 'to'])

MOVE_DIRECTIONS = {'up': -1, 'down': 1}


class Match:
    """The one shared match: state, sessions, timers and the rules between them.

    Transport threads only ever call the intent methods (``connect``,
    ``move``, ``set_ready`` ...), which queue the intent and return at
    once. The scheduler loop is the sole caller of ``pump`` and ``tick``,
    which apply queued intents and advance physics under the match lock
    and hand back the events to publish.
    """

    def __init__(self, settings: MatchSettings, logger: Optional[logging.Logger] = None,
                 rng: Optional[random.Random] = None):
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.rng = rng or random.Random()
        self.state = MatchState(settings)
        self.registry = SessionRegistry(self.state.slots)
        self.physics_timer = PeriodicTimer(settings.tick_interval)
        self.respawn_timer = OneShotTimer()
        self._intents: Deque[Tuple[str, str, Any]] = deque()
        self._lock = threading.Lock()
        self._outbox: List[Outbound] = []

    # ---- Inbound intents (any thread) ----

    def connect(self, sid: str) -> None:
        self._intents.append(('connect', sid, None))

    def disconnect(self, sid: str) -> None:
        self._intents.append(('disconnect', sid, None))

    def move(self, sid: str, direction: Any) -> None:
        self._intents.append(('move', sid, direction))

    def set_position(self, sid: str, y: Any) -> None:
        self._intents.append(('set_position', sid, y))

    def set_ready(self, sid: str, ready: bool = True) -> None:
        self._intents.append(('ready', sid, bool(ready)))

    def rematch(self, sid: str) -> None:
        self._intents.append(('rematch', sid, None))

    @property
    def pending_intents(self) -> int:
        return len(self._intents)

    # ---- Loop side ----

    def snapshot(self) -> dict:
        with self._lock:
            return self.state.to_dict()

    def pump(self, now: float) -> List[Outbound]:
        """Apply every queued intent in arrival order, then any due respawn."""
        with self._lock:
            while self._intents:
                kind, sid, payload = self._intents.popleft()
                try:
                    self._apply(kind, sid, payload, now)
                except MatchError as exc:
                    self.logger.debug(f"[intent-drop] kind={kind} sid={sid} reason={type(exc).__name__}")
            if self.respawn_timer.due(now):
                self._respawn(self.respawn_timer.fire())
            return self._flush()

    def tick(self, now: float) -> List[Outbound]:
        """Run one physics step. Does nothing unless the match is being played."""
        with self._lock:
            if self.state.phase != PLAYING:
                return self._flush()
            scorer = physics.step(self.state, self.settings)
            if scorer is not None:
                self._score(scorer, now)
            return self._flush()

    # ---- Intent application ----

    def _apply(self, kind: str, sid: str, payload: Any, now: float) -> None:
        if kind == 'connect':
            self._on_connect(sid)
        elif kind == 'disconnect':
            self._on_disconnect(sid)
        elif kind == 'move':
            self._on_move(sid, payload)
        elif kind == 'set_position':
            self._on_set_position(sid, payload)
        elif kind == 'ready':
            self._on_ready(sid, payload, now)
        elif kind == 'rematch':
            if self.state.phase != ENDED:
                raise InvalidIntent('rematch outside of an ended match')
            self._on_ready(sid, True, now)
        else:
            raise InvalidIntent(kind)

    def _on_connect(self, sid: str) -> None:
        try:
            index = self.registry.connect(sid)
        except CapacityExceeded:
            self._emit('spectating', {}, to=sid)
            self.logger.info(f"[connect] sid={sid} spectating live={self.registry.live_count}")
        else:
            self.state.slots[index].reset(self.state.paddle_home)
            self._emit('slot_assigned', {'slot': index}, to=sid)
            self.logger.info(f"[connect] sid={sid} slot={index} live={self.registry.live_count}")
        self._update_player_count()
        self._emit('state', self.state.to_dict(), to=sid)

    def _on_disconnect(self, sid: str) -> None:
        released, rebound = self.registry.disconnect(sid)
        for index in rebound:
            slot = self.state.slots[index]
            slot.reset(self.state.paddle_home)
            if slot.sid is not None:
                self._emit('slot_assigned', {'slot': index}, to=slot.sid)
        self.logger.info(f"[disconnect] sid={sid} slot={released} live={self.registry.live_count}")
        if self.registry.live_count < 2 or (released is not None and self.state.phase != LOBBY):
            self._force_lobby()
        self._update_player_count()

    def _resolve_player(self, sid: str):
        index = self.registry.resolve_slot(sid)
        if index is None:
            raise InvalidIntent('spectators cannot control a paddle')
        return self.state.slots[index]

    def _on_move(self, sid: str, direction: Any) -> None:
        if self.state.phase != PLAYING:
            raise InvalidIntent('move outside of play')
        slot = self._resolve_player(sid)
        step = MOVE_DIRECTIONS.get(direction)
        if step is None:
            raise InvalidIntent(f'bad direction {direction!r}')
        slot.y = physics.clamp_paddle(slot.y + step * self.settings.paddle_speed, self.settings)

    def _on_set_position(self, sid: str, y: Any) -> None:
        if self.state.phase != PLAYING:
            raise InvalidIntent('set_position outside of play')
        slot = self._resolve_player(sid)
        if isinstance(y, bool):
            raise InvalidIntent('position must be a number')
        try:
            y = float(y)
        except (TypeError, ValueError):
            raise InvalidIntent('position must be a number')
        if not math.isfinite(y):
            raise InvalidIntent('position must be finite')
        slot.y = physics.clamp_paddle(y, self.settings)

    def _on_ready(self, sid: str, ready: bool, now: float) -> None:
        if self.state.phase not in (LOBBY, ENDED):
            raise InvalidIntent('ready during play')
        slot = self._resolve_player(sid)
        slot.ready = ready
        self._emit('ready_changed', {'slot': slot.index, 'ready': ready})
        self._maybe_start(now)

    # ---- Transitions ----

    def _maybe_start(self, now: float) -> None:
        if self.state.phase == PLAYING:
            return
        slots = self.state.slots
        if self.registry.live_count < 2 or not all(s.occupied and s.ready for s in slots):
            return
        self._start_match(now)

    def _start_match(self, now: float) -> None:
        state = self.state
        rematch = state.phase == ENDED
        for slot in state.slots:
            slot.reset(state.paddle_home)
        state.winner = None
        state.scoring = False
        state.match_id += 1
        state.phase = PLAYING
        physics.serve(state.ball, self.settings, self.rng)
        self.respawn_timer.cancel()
        self.physics_timer.start(now)
        self._emit('match_started', {'match_id': state.match_id})
        self.logger.info(f"[match-start] match={state.match_id} rematch={rematch}")

    def _score(self, scorer: int, now: float) -> None:
        state = self.state
        state.scoring = True
        state.slots[scorer].score += 1
        self._emit('point_scored', {'slot': scorer, 'scores': state.scores})
        self.logger.info(f"[score] match={state.match_id} slot={scorer} scores={state.scores}")
        if state.slots[scorer].score >= self.settings.winning_score:
            self._end_match(scorer)
            return
        self.respawn_timer.arm(now + self.settings.respawn_delay, state.match_id)

    def _end_match(self, winner: int) -> None:
        state = self.state
        self.physics_timer.stop()
        self.respawn_timer.cancel()
        state.winner = winner
        state.ball.vx = 0.0
        state.ball.vy = 0.0
        state.scoring = False
        state.phase = ENDED
        self._emit('match_won', {'winner': winner, 'scores': state.scores})
        self.logger.info(f"[match-won] match={state.match_id} winner={winner} scores={state.scores}")

    def _respawn(self, match_id: Any) -> None:
        state = self.state
        if state.phase != PLAYING or match_id != state.match_id:
            self.logger.info(f"[timer-skip] respawn for match={match_id} phase={state.phase} current={state.match_id}")
            return
        physics.serve(state.ball, self.settings, self.rng)
        state.scoring = False
        self.logger.info(f"[respawn] match={state.match_id} vx={state.ball.vx} vy={state.ball.vy:.2f}")

    def _force_lobby(self) -> None:
        state = self.state
        previous = state.phase
        self.physics_timer.stop()
        self.respawn_timer.cancel()
        for slot in state.slots:
            slot.ready = False
        state.phase = LOBBY
        state.winner = None
        state.scoring = False
        state.ball.center(self.settings)
        if previous != LOBBY:
            self.logger.info(f"[force-lobby] match={state.match_id} from={previous} live={self.registry.live_count}")

    # ---- Outbound ----

    def _update_player_count(self) -> None:
        self.state.player_count = self.registry.live_count
        self._emit('player_count', {'count': self.state.player_count})

    def _emit(self, name: str, payload: dict, to: Optional[str] = None) -> None:
        self._outbox.append(Outbound(name, payload, to))

    def _flush(self) -> List[Outbound]:
        events, self._outbox = self._outbox, []
        return events
