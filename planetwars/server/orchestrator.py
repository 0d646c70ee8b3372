"""Match orchestration: players, turn loop and replay.

The orchestrator spawns one process per player command, then repeats until
the match is decided:

1. Send each live player its rotated view of the state and collect orders
2. Apply the orders in the order they were received; bad orders, timeouts
   and broken pipes get the player dropped
3. Advance the simulation one time step and record the replay

Players are served one after the other in ascending id order, so a player
sees the fleets launched earlier in the same turn. With
``parallel_exchanges`` all exchanges run at once on the same snapshot and
the replies are applied afterwards, still in ascending id order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, TextIO

from ..engine.turn_executor import TurnExecutor
from ..errors import OrderError, ProcessSpawnError, ProtocolError
from ..models.game import GameState
from ..protocol.client import PlayerProcess, spawn_player
from ..utils.constants import DRAW, NO_DECISION
from ..utils.match_log import MatchLog
from ..utils.serialization import load_game_state, parse_game_state, render_game_state
from .config import MatchConfig

logger = logging.getLogger(__name__)

Spawner = Callable[[str, int], PlayerProcess]


class MatchPhase(Enum):
    """Orchestrator lifecycle."""

    INIT = "init"
    RUNNING = "running"
    FINISHED = "finished"


@dataclass
class MatchResult:
    """Outcome of a finished match.

    Attributes:
        winner: Winning player id, or 0 for a draw
        turns: Time steps simulated
        playback: Full replay string
        dropped: Player ids dropped during the match, in drop order
    """

    winner: int
    turns: int
    playback: str
    dropped: List[int] = field(default_factory=list)

    @property
    def is_draw(self) -> bool:
        return self.winner == DRAW


class MatchOrchestrator:
    """Runs one match from spawning the players to the final decision."""

    def __init__(
        self,
        config: MatchConfig,
        spawner: Spawner = spawn_player,
        replay_stream: Optional[TextIO] = None,
    ):
        """Initialize the orchestrator.

        Args:
            config: Validated match parameters
            spawner: Starts a player from (command, player_id)
            replay_stream: If given, replay text is written here as it is produced
        """
        self.config = config
        self.spawner = spawner
        self.replay_stream = replay_stream
        self.turn_executor = TurnExecutor()
        self.phase = MatchPhase.INIT
        self.game: Optional[GameState] = None
        self.clients: List[PlayerProcess] = []
        self.dropped: List[int] = []
        self.match_log: Optional[MatchLog] = None

    def run(self) -> MatchResult:
        """Play the match to the end.

        Raises:
            MalformedStateError: If the map cannot be loaded
            ProcessSpawnError: If a player cannot be started
        """
        self._initialize()
        try:
            self.phase = MatchPhase.RUNNING
            winner = self._play()
            if winner == DRAW:
                logger.info("Draw!")
            else:
                logger.info(f"Player {winner} Wins!")
            self.match_log.write(f"winner: {winner}")
        finally:
            self._finish()

        return MatchResult(
            winner=winner,
            turns=self.game.num_turns,
            playback=self.game.playback,
            dropped=list(self.dropped),
        )

    # =========================================================================
    # INIT
    # =========================================================================

    def _initialize(self) -> None:
        self.match_log = MatchLog(self.config.log_path)
        self.match_log.write("initializing")
        try:
            self.game = self._load_game()
            self.clients = self._spawn_players()
        except Exception:
            self.match_log.close()
            raise

    def _load_game(self) -> GameState:
        if self.config.map_path is not None:
            return load_game_state(self.config.map_path)
        return parse_game_state(self.config.map_data)

    def _spawn_players(self) -> List[PlayerProcess]:
        clients: List[PlayerProcess] = []
        for index, command in enumerate(self.config.player_commands):
            try:
                clients.append(self.spawner(command, index + 1))
            except ProcessSpawnError as e:
                logger.error(str(e))
                for client in clients:
                    client.kill()
                raise
        return clients

    # =========================================================================
    # RUNNING
    # =========================================================================

    def _play(self) -> int:
        winner = self.turn_executor.check_winner(self.game, self.config.max_turns)
        while winner == NO_DECISION:
            self._serve_players()

            self.game, results = self.turn_executor.execute_time_step(self.game)
            self._stream_playback()
            logger.info(f"Turn {results.turn}")

            winner = self.turn_executor.check_winner(self.game, self.config.max_turns)
        return winner

    def _live_clients(self) -> List[PlayerProcess]:
        return [
            client
            for client in self.clients
            if client.is_alive() and self.game.is_alive(client.player_id)
        ]

    def _serve_players(self) -> None:
        live = self._live_clients()
        if self.config.parallel_exchanges and len(live) > 1:
            self._serve_in_parallel(live)
        else:
            self._serve_sequentially(live)

    def _serve_sequentially(self, live: List[PlayerProcess]) -> None:
        for client in live:
            message = render_game_state(self.game, client.player_id)
            try:
                lines = client.session.exchange(message, self.config.turn_timeout_ms)
            except ProtocolError as e:
                self._handle_protocol_error(client, e)
                continue
            self._apply_orders(client, lines)

    def _serve_in_parallel(self, live: List[PlayerProcess]) -> None:
        messages = {c.player_id: render_game_state(self.game, c.player_id) for c in live}
        with ThreadPoolExecutor(max_workers=len(live), thread_name_prefix="exchange") as pool:
            futures = {
                c.player_id: pool.submit(
                    c.session.exchange, messages[c.player_id], self.config.turn_timeout_ms
                )
                for c in live
            }

        for client in live:
            try:
                lines = futures[client.player_id].result()
            except ProtocolError as e:
                self._handle_protocol_error(client, e)
                continue
            self._apply_orders(client, lines)

    def _apply_orders(self, client: PlayerProcess, lines: List[str]) -> None:
        """Apply a player's order lines in receive order.

        The first bad order drops the player and ends its turn. Its process
        keeps running until the match ends, but its output is ignored.
        """
        player_id = client.player_id
        for line in lines:
            self.match_log.write(f"player{player_id} > engine: {line}")
            try:
                self.turn_executor.apply_order(self.game, player_id, line)
            except OrderError as e:
                logger.warning(f"Player {player_id} sent a bad order ({type(e).__name__}): {e}")
                self.match_log.write(f"Dropping player {player_id}. {e.message}")
                self._drop(player_id)
                client.session.close()
                return

    def _handle_protocol_error(self, client: PlayerProcess, error: ProtocolError) -> None:
        logger.warning(f"Player {client.player_id} {type(error).__name__}: {error}")
        self.match_log.write(f"Dropping player {client.player_id}. {error}")
        self._drop(client.player_id)
        client.kill()

    def _drop(self, player_id: int) -> None:
        self.turn_executor.drop_player(self.game, player_id)
        if player_id not in self.dropped:
            self.dropped.append(player_id)

    def _stream_playback(self) -> None:
        fragment = self.game.flush_playback()
        if self.replay_stream is not None and fragment:
            self.replay_stream.write(fragment)
            self.replay_stream.flush()

    # =========================================================================
    # FINISHED
    # =========================================================================

    def _finish(self) -> None:
        for client in self.clients:
            client.kill()
        self._stream_playback()
        self.match_log.close()
        self.phase = MatchPhase.FINISHED
