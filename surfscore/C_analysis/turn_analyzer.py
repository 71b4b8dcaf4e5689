"""Fachada por fotograma: extrae señales, las suaviza y alimenta la máquina de estados.

Cada instancia posee sus propios filtros, máquina e históricos; para analizar
varios vídeos en paralelo basta con crear un ``TurnAnalyzer`` por flujo.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from surfscore.B_pose_estimation.geometry import TurnSignals, extract_turn_signals
from surfscore.B_pose_estimation.signal import ExponentialSmoother
from surfscore.B_pose_estimation.types import FramePose, as_frame_pose
from surfscore.config.models import TurnConfig
from surfscore.core.types import TurnState

from .turn_fsm import TurnResult, TurnStateMachine

logger = logging.getLogger(__name__)


class TurnAnalyzer:
    """Analizador de maniobras bottom turn + top turn para un único surfista."""

    def __init__(self, cfg: Optional[TurnConfig] = None) -> None:
        self.cfg = (cfg.copy() if cfg is not None else TurnConfig()).validate()
        self._last_pose: Optional[FramePose] = None
        self._last_raw: Optional[TurnSignals] = None
        self._last_smoothed: Optional[TurnSignals] = None
        self._build()

    def _build(self) -> None:
        alpha = self.cfg.signal.smoothing_alpha
        self._knee = ExponentialSmoother(alpha)
        self._torso = ExponentialSmoother(alpha)
        self._rot = ExponentialSmoother(alpha)
        self._fsm = TurnStateMachine(self.cfg)
        self._results: List[TurnResult] = []
        self._frames_processed = 0

    def process_frame(self, frame: Any) -> Optional[TurnResult]:
        """Procesa un fotograma; devuelve un ``TurnResult`` solo al completar una maniobra.

        ``frame`` puede ser una ``FramePose``, un mapeo ``{nombre: {x, y, ...}}``,
        una lista de articulaciones con nombre, un array de landmarks normalizados
        o ``None`` cuando no hubo detección.
        """

        pose = as_frame_pose(frame).filtered(self.cfg.signal.min_joint_confidence)
        raw = extract_turn_signals(pose)
        smoothed = TurnSignals(
            knee=self._knee.update(raw.knee),
            torso=self._torso.update(raw.torso),
            rot=self._rot.update(raw.rot),
        )
        self._last_pose = pose
        self._last_raw = raw
        self._last_smoothed = smoothed
        self._frames_processed += 1

        result = self._fsm.update(*smoothed.as_tuple())
        if result is not None:
            self._results.append(result)
            logger.debug(
                "Resultado %d emitido en el fotograma %d", len(self._results), self._frames_processed
            )
        return result

    @property
    def current_state(self) -> str:
        """Etiqueta legible del estado de la máquina."""
        return self._fsm.label

    @property
    def state(self) -> TurnState:
        return self._fsm.state

    @property
    def turn_results(self) -> List[TurnResult]:
        """Copia de los resultados acumulados en la sesión."""
        return list(self._results)

    @property
    def frames_processed(self) -> int:
        return self._frames_processed

    @property
    def last_pose(self) -> Optional[FramePose]:
        """Pose del último fotograma tras el filtrado por confianza."""
        return self._last_pose

    @property
    def last_raw_signals(self) -> Optional[TurnSignals]:
        return self._last_raw

    @property
    def last_smoothed_signals(self) -> Optional[TurnSignals]:
        return self._last_smoothed

    def reset(self) -> None:
        """Reinicia filtros, máquina de estados y resultados acumulados."""
        logger.debug("Reinicio del analizador tras %d fotogramas", self._frames_processed)
        self._last_pose = None
        self._last_raw = None
        self._last_smoothed = None
        self._build()


__all__ = ["TurnAnalyzer"]
