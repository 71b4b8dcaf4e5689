"""Constantes globales del motor de análisis de maniobras."""
# --- GEOMETRÍA ---
# Épsilon que protege el denominador de los cosenos cuando un vector es nulo.
ANGLE_EPS = 1e-9

# Referencia vertical "hacia arriba" en coordenadas de imagen (y crece hacia abajo).
VERTICAL_UP = (0.0, -1.0)

# Valores por defecto cuando faltan articulaciones en el fotograma.
DEFAULT_KNEE_FLEXION_DEG = 90.0
DEFAULT_TORSO_LEAN_DEG = 0.0
DEFAULT_ROTATION_DEG = 0.0

# Confianza asignada a landmarks sin visibilidad informada.
DEFAULT_JOINT_CONFIDENCE = 0.5

# Los landmarks normalizados (0-1) se escalan a porcentaje del fotograma.
PERCENT_SCALE = 100.0

# --- HISTÓRICOS ---
# Capacidad de los históricos usados para la métrica de suavidad.
HISTORY_CAPACITY = 30
