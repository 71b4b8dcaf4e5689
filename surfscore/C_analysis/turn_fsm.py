"""Máquina de estados que detecta un bottom turn seguido de un top turn.

Recorre ``IDLE → BOTTOM → TRANSITION → TOP → COOLDOWN → IDLE`` consumiendo un
trío de ángulos suavizados por fotograma. Mientras está en BOTTOM mantiene una
instantánea con la compresión más cercana al objetivo biomecánico; al salir de
BOTTOM puntúa esa instantánea y al salir de TOP empareja ambas fases en un
``TurnResult``, que es lo único que devuelve al llamador.

Los fotogramas deben llegar en orden temporal estricto. La máquina no lo
comprueba: un orden incorrecto corrompe los históricos y las condiciones de
salida basadas en deltas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from surfscore.B_pose_estimation.signal import SignalHistory
from surfscore.config.models import TurnConfig
from surfscore.core.types import TurnState, human_label

from .scoring import ScoreDetail, score_bottom_turn, score_top_turn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TurnSnapshot:
    """Trío (rodilla, torso, rotación) representativo de la compresión del bottom turn."""

    knee: float
    torso: float
    rot: float

    def to_dict(self) -> Dict[str, float]:
        return {"knee": float(self.knee), "torso": float(self.torso), "rot": float(self.rot)}


EMPTY_SNAPSHOT = TurnSnapshot(knee=0.0, torso=0.0, rot=0.0)


# Vista de solo lectura del detalle; el hash del resultado no depende de ella.
DetailView = Mapping[str, Tuple[int, float]]


def _frozen_detail(detail: ScoreDetail) -> DetailView:
    return MappingProxyType(dict(detail))


def _detail_to_dict(detail: DetailView) -> Dict[str, list]:
    return {name: [int(points), float(raw)] for name, (points, raw) in detail.items()}


@dataclass(frozen=True)
class BottomTurnScore:
    score: int
    detail: DetailView = field(hash=False)
    snapshot: TurnSnapshot
    frames: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": int(self.score),
            "detail": _detail_to_dict(self.detail),
            "snapshot": self.snapshot.to_dict(),
            "frames": int(self.frames),
        }


@dataclass(frozen=True)
class TopTurnScore:
    score: int
    detail: DetailView = field(hash=False)
    frames: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": int(self.score),
            "detail": _detail_to_dict(self.detail),
            "frames": int(self.frames),
        }


@dataclass(frozen=True)
class TurnResult:
    """Resultado inmutable de un ciclo completo bottom turn + top turn."""

    bottom_turn: BottomTurnScore
    top_turn: TopTurnScore

    @property
    def total_score(self) -> int:
        return int(self.bottom_turn.score + self.top_turn.score)

    def to_dict(self) -> Dict[str, Any]:
        """Forma serializable ``{"bottom_turn": {...}, "top_turn": {...}}``."""
        return {"bottom_turn": self.bottom_turn.to_dict(), "top_turn": self.top_turn.to_dict()}


@dataclass
class _BottomPhase:
    """Contexto que vive desde la entrada en BOTTOM hasta el regreso a IDLE."""

    snapshot: TurnSnapshot
    score: Optional[Tuple[int, ScoreDetail]] = None


class TurnStateMachine:
    """Detector de maniobras por fotograma con histórico acotado por fase."""

    def __init__(self, cfg: Optional[TurnConfig] = None) -> None:
        self.cfg = (cfg.copy() if cfg is not None else TurnConfig()).validate()
        capacity = int(self.cfg.signal.history_capacity)
        self._bottom_history = SignalHistory(capacity)
        self._top_history = SignalHistory(capacity)
        self._state = TurnState.IDLE
        self._frames_in_state = 0
        self._bottom: Optional[_BottomPhase] = None
        self._prev_knee: Optional[float] = None
        self._handlers: Dict[TurnState, Callable[[float, float, float], Optional[TurnResult]]] = {
            TurnState.IDLE: self._on_idle,
            TurnState.BOTTOM: self._on_bottom,
            TurnState.TRANSITION: self._on_transition,
            TurnState.TOP: self._on_top,
            TurnState.COOLDOWN: self._on_cooldown,
        }

    # --- Estado público --------------------------------------------------------
    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def label(self) -> str:
        """Etiqueta legible del estado actual."""
        return human_label(self._state)

    @property
    def frames_in_state(self) -> int:
        return self._frames_in_state

    @property
    def snapshot(self) -> Optional[TurnSnapshot]:
        return self._bottom.snapshot if self._bottom is not None else None

    @property
    def bottom_history_size(self) -> int:
        return len(self._bottom_history)

    @property
    def top_history_size(self) -> int:
        return len(self._top_history)

    def reset(self) -> None:
        self._bottom_history.clear()
        self._top_history.clear()
        self._state = TurnState.IDLE
        self._frames_in_state = 0
        self._bottom = None
        self._prev_knee = None

    # --- Entrada por fotograma -------------------------------------------------
    def update(self, knee: float, torso: float, rot: float) -> Optional[TurnResult]:
        """Consume el trío suavizado de un fotograma; devuelve un resultado al cerrar TOP."""

        knee, torso, rot = float(knee), float(torso), float(rot)
        self._frames_in_state += 1

        if self._state in (TurnState.IDLE, TurnState.BOTTOM):
            self._bottom_history.append(knee, torso, rot)
        elif self._state in (TurnState.TRANSITION, TurnState.TOP):
            self._top_history.append(knee, torso, rot)

        result = self._handlers[self._state](knee, torso, rot)
        self._prev_knee = knee
        return result

    def _enter(self, state: TurnState, *, frames: int = 0) -> None:
        logger.debug(
            "Transición %s -> %s tras %d fotogramas", self._state.name, state.name, self._frames_in_state
        )
        self._state = state
        self._frames_in_state = frames

    # --- Manejadores por estado ------------------------------------------------
    def _on_idle(self, knee: float, torso: float, rot: float) -> None:
        det = self.cfg.detection
        compressed = det.bt_knee_min <= knee <= det.bt_knee_max
        leaning = det.bt_torso_min <= torso <= det.bt_torso_max
        rotated = rot >= det.rot_min
        if compressed and leaning and rotated:
            self._bottom = _BottomPhase(snapshot=TurnSnapshot(knee, torso, rot))
            self._enter(TurnState.BOTTOM, frames=1)
        return None

    def _on_bottom(self, knee: float, torso: float, rot: float) -> None:
        det = self.cfg.detection
        phase = self._bottom

        # Se conserva la compresión más cercana al objetivo, no la primera muestra.
        if abs(knee - det.bt_knee_target) < abs(phase.snapshot.knee - det.bt_knee_target):
            phase.snapshot = TurnSnapshot(knee, torso, rot)

        snapshot = phase.snapshot
        extending = self._prev_knee is not None and (knee - self._prev_knee) > det.bt_exit_knee_delta
        more_upright = torso < det.bt_exit_torso_threshold or torso < snapshot.torso - det.bt_exit_torso_drop
        if not (extending and more_upright and self._frames_in_state >= det.min_state_frames):
            return None

        phase.score = score_bottom_turn(
            snapshot.knee,
            snapshot.torso,
            snapshot.rot,
            self._bottom_history.knee.to_list(),
            self._bottom_history.torso.to_list(),
            self._bottom_history.rot.to_list(),
            cfg=self.cfg.scoring,
        )
        self._top_history.clear()
        self._enter(TurnState.TRANSITION)
        return None

    def _on_transition(self, knee: float, torso: float, rot: float) -> None:
        if self._frames_in_state >= self.cfg.detection.transition_frames:
            self._enter(TurnState.TOP)
        return None

    def _on_top(self, knee: float, torso: float, rot: float) -> Optional[TurnResult]:
        det = self.cfg.detection
        snapshot = self.snapshot
        knee_at_bottom = snapshot.knee if snapshot is not None else None

        upright = torso <= det.tt_torso_max
        rotated = rot >= det.tt_rot_min
        extended = knee_at_bottom is None or (knee - knee_at_bottom) >= det.tt_knee_ext_min
        if not (upright and rotated and extended and self._frames_in_state >= det.min_state_frames):
            return None

        top_score, top_detail = score_top_turn(
            knee,
            knee_at_bottom,
            torso,
            rot,
            self._top_history.knee.to_list(),
            self._top_history.torso.to_list(),
            self._top_history.rot.to_list(),
            cfg=self.cfg.scoring,
        )
        bottom_score, bottom_detail = (
            self._bottom.score if self._bottom is not None and self._bottom.score is not None else (0, {})
        )
        result = TurnResult(
            bottom_turn=BottomTurnScore(
                score=int(bottom_score),
                detail=_frozen_detail(bottom_detail),
                snapshot=snapshot if snapshot is not None else EMPTY_SNAPSHOT,
                frames=len(self._bottom_history),
            ),
            top_turn=TopTurnScore(
                score=int(top_score),
                detail=_frozen_detail(top_detail),
                frames=len(self._top_history),
            ),
        )
        self._enter(TurnState.COOLDOWN)
        logger.info(
            "Maniobra completada: bottom=%d/10 (%d fotogramas), top=%d/10 (%d fotogramas)",
            result.bottom_turn.score,
            result.bottom_turn.frames,
            result.top_turn.score,
            result.top_turn.frames,
        )
        return result

    def _on_cooldown(self, knee: float, torso: float, rot: float) -> None:
        if self._frames_in_state >= self.cfg.detection.cooldown_frames:
            self._bottom = None
            self._bottom_history.clear()
            self._top_history.clear()
            self._enter(TurnState.IDLE)
        return None


__all__ = [
    "TurnSnapshot",
    "BottomTurnScore",
    "TopTurnScore",
    "TurnResult",
    "TurnStateMachine",
]
