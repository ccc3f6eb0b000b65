import math

G = 9.81  # m/s²
AIR_DENSITY = 1.225  # kg/m³
CRR = 0.004  # rolling resistance coefficient

MIN_SPEED_MS = 0.1  # lower bracket for the speed search
SPEED_TOLERANCE_MS = 0.001
MAX_ITERATIONS = 100


def power_needed(speed_ms: float, grade: float, mass: float, cda: float) -> float:
    """Power in watts required to hold a constant speed on a given grade.

    Resistance is the sum of the gravity component m*g*sin(theta), rolling
    resistance m*g*cos(theta)*Crr and aero drag 0.5*rho*CdA*v^2, where
    theta = atan(grade). Negative on descents where gravity outweighs the
    other forces.
    """
    theta = math.atan(grade)
    f_gravity = mass * G * math.sin(theta)
    f_rolling = mass * G * math.cos(theta) * CRR
    f_air = 0.5 * AIR_DENSITY * cda * speed_ms * speed_ms
    return (f_gravity + f_rolling + f_air) * speed_ms


def solve_speed(
    grade: float, mass: float, cda: float, max_power: float, max_speed_ms: float
) -> float:
    """Find the steady speed in m/s the rider reaches on a grade.

    If max_speed_ms can be held within max_power the rider is speed-limited
    and max_speed_ms is returned exactly. Otherwise the speed where
    power_needed equals max_power is found by bisection over
    [MIN_SPEED_MS, max_speed_ms], relying on power_needed increasing with
    speed. The search stops once the bracket is narrower than
    SPEED_TOLERANCE_MS or after MAX_ITERATIONS halvings.
    """
    if power_needed(max_speed_ms, grade, mass, cda) <= max_power:
        return max_speed_ms

    # A cap below the floor collapses the bracket onto the cap
    v_min = min(MIN_SPEED_MS, max_speed_ms)
    v_max = max_speed_ms
    iterations = 0

    while v_max - v_min > SPEED_TOLERANCE_MS and iterations < MAX_ITERATIONS:
        v_mid = (v_min + v_max) / 2
        if power_needed(v_mid, grade, mass, cda) < max_power:
            v_min = v_mid
        else:
            v_max = v_mid
        iterations += 1

    return (v_min + v_max) / 2
