"""Parámetros por defecto del detector de maniobras y de la rúbrica de puntuación."""

from __future__ import annotations

# --- SUAVIZADO DE SEÑALES ---
# Factor de la media móvil exponencial aplicada a rodilla, torso y rotación.
# Un valor alto privilegia la historia frente al fotograma actual.
SMOOTHING_ALPHA = 0.9

# Confianza mínima de una articulación para usarla en la geometría. Con 0.0
# se aceptan todas, que es el comportamiento histórico del analizador.
MIN_JOINT_CONFIDENCE = 0.0

# --- MÁQUINA DE ESTADOS ---
# Fotogramas mínimos en BOTTOM y en TOP antes de aceptar la salida.
MIN_STATE_FRAMES = 6

# Fotogramas que se espera en TRANSITION para llegar al labio de la ola.
TRANSITION_FRAMES = 3

# Fotogramas de enfriamiento antes de buscar una nueva maniobra.
COOLDOWN_FRAMES = 12

# Entrada en el bottom turn: compresión, inclinación y rotación simultáneas.
BT_KNEE_MIN = 70.0
BT_KNEE_MAX = 100.0
BT_TORSO_MIN = 20.0
BT_TORSO_MAX = 40.0
ROT_MIN = 15.0

# Ángulo de rodilla considerado compresión ideal para fijar la instantánea.
BT_KNEE_TARGET = 85.0

# Salida del bottom turn: la rodilla se extiende más de este delta por fotograma
# y el torso se endereza por debajo del umbral o respecto a la instantánea.
BT_EXIT_KNEE_DELTA = 3.0
BT_EXIT_TORSO_MARGIN = 2.0
BT_EXIT_TORSO_FLOOR = 10.0
BT_EXIT_TORSO_DROP = 5.0

# Salida del top turn: torso erguido, rotación mantenida y extensión.
TT_TORSO_UPRIGHT_MAX = 20.0
TT_TORSO_TOLERANCE = 10.0
TT_ROT_MIN = 10.0
TT_KNEE_EXT_MIN = 5.0

# --- RÚBRICA DE PUNTUACIÓN ---
# Bandas de compresión (rodilla) y de inclinación del torso del bottom turn:
# cada tupla es (mínimo, máximo) de la banda de 3 puntos y los márgenes que
# conceden 2 y 1 puntos por debajo y por encima.
COMPRESSION_BANDS = ((70.0, 100.0), (60.0, 110.0), (50.0, 120.0))
TORSO_LEAN_BANDS = ((20.0, 40.0), (15.0, 50.0), (10.0, 60.0))

# Rotación hombros/caderas en el bottom turn: 2 puntos y 1 punto.
BT_ROTATION_TIERS = (15.0, 10.0)

# Extensión respecto al bottom turn y rotación en el top turn: 3, 2 y 1 puntos.
KNEE_EXT_TIERS = (15.0, 10.0, 5.0)
TT_ROTATION_TIERS = (15.0, 10.0, 5.0)

# Torso erguido en el top turn: 2 puntos y 1 punto.
TT_UPRIGHT_TIERS = (20.0, 30.0)

# Suavidad: media de desviaciones típicas (menor = más fluido).
SMOOTH_STD_MAX = 8.0
SMOOTH_STD_RELAXED_FACTOR = 1.5
SMOOTH_MIN_SAMPLES = 5

# Decimales con los que se reportan los valores brutos en el detalle.
DETAIL_DECIMALS = 2
