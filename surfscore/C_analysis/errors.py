"""Excepciones específicas del dominio utilizadas por el analizador de maniobras.

Las condiciones esperadas (articulaciones ausentes, históricos cortos, falta de
instantánea) nunca lanzan: se degradan a valores por defecto. Estas excepciones
solo señalan un uso incorrecto por parte del llamador."""


class TurnAnalysisError(Exception):
    """Excepción base del analizador de maniobras."""


class InvalidConfigError(TurnAnalysisError, ValueError):
    """Se lanza cuando la configuración contiene valores fuera de rango."""


class InvalidFrameError(TurnAnalysisError, TypeError):
    """Se lanza cuando ``process_frame`` recibe un objeto que no describe una pose."""
