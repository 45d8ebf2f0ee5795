"""
Two-Body Reference
==================

Closed-form Keplerian conversions and propagation, used as an independent
reference for the Orekit propagations in the validation suite.
"""
import numpy as np

from orbit_comparator.model.constants import SOLARSYSTEMCONSTANTS


class TwoBody_RootSolvers:
  """
  Root solvers for two-body orbital mechanics.
  """

  @staticmethod
  def kepler(
    ma       : float,
    ecc      : float,
    tol      : float = 1e-13,
    max_iter : int   = 50,
  ) -> float:
    """
    Solve Kepler's equation ma = ea - ecc*sin(ea) for eccentric anomaly ea.

    Input:
    ------
      ma : float
        Mean anomaly [rad]
      ecc : float
        Eccentricity (0 <= ecc < 1)
      tol : float
        Convergence tolerance [rad]
      max_iter : int
        Maximum iterations

    Output:
    -------
      ea : float
        Eccentric anomaly [rad]

    Raises:
    -------
      ValueError
        If the iteration does not converge.
    """
    # Initial guess
    if ecc < 0.8:
      ea = ma
    else:
      ea = np.pi

    # Newton-Raphson iteration
    for _ in range(max_iter):
      func       = ea - ecc * np.sin(ea) - ma
      func_prime = 1 - ecc * np.cos(ea)
      delta_ea   = -func / func_prime
      ea         = ea + delta_ea
      if abs(delta_ea) < tol:
        return float(ea)

    raise ValueError(f"Kepler's equation not converged for ma={ma}, ecc={ecc}")


class OrbitConverter:
  """
  Conversion between position/velocity and classical orbital elements, and
  closed-form Keplerian propagation used as the analytical reference of the
  two-body comparison.
  """

  @staticmethod
  def pv_to_coe(
    pos_vec : np.ndarray,
    vel_vec : np.ndarray,
    gp      : float = SOLARSYSTEMCONSTANTS.EARTH.GP,
  ) -> dict:
    """
    Convert Cartesian position and velocity vectors to classical orbital elements.

    Input:
    ------
      pos_vec : np.ndarray
        Position vector [m].
      vel_vec : np.ndarray
        Velocity vector [m/s].
      gp : float
        Gravitational parameter [m³/s²].

    Output:
    -------
      coe : dict
        Dictionary containing orbital elements:
        - sma  : semi-major axis [m]
        - ecc  : eccentricity [-]
        - inc  : inclination [rad]
        - raan : right ascension of the ascending node [rad]
        - aop  : argument of periapsis [rad]
        - ta   : true anomaly [rad]
        - ea   : eccentric anomaly [rad] (None for hyperbolic)
        - ma   : mean anomaly [rad] (None for hyperbolic)

    Notes:
    ------
      - Rectilinear and parabolic orbits are not handled.
      - For the circular case the argument of periapsis is ill-defined. The
        periapsis direction is set equal to the position direction, so ta = 0.
      - For the equatorial case the ascending node is ill-defined. raan is set
        to 0 and aop is measured from the x-axis.

    Source:
    -------
      Modified from
      Analytical Mechanics of Space Systems, Fourth Edition
      Hanspeter Schaub and John L. Junkins
      DOI: https://doi.org/10.2514/4.105210
    """
    # Small number for numerical comparisons
    eps = 1e-12

    pos_vec = np.asarray(pos_vec, dtype=float).flatten()
    vel_vec = np.asarray(vel_vec, dtype=float).flatten()

    # Orbit radius
    pos_mag = np.linalg.norm(pos_vec)
    pos_dir = pos_vec / pos_mag

    # Angular momentum vector
    ang_mom_vec = np.cross(pos_vec, vel_vec)
    ang_mom_mag = np.linalg.norm(ang_mom_vec)
    if ang_mom_mag < eps:
      raise ValueError("Rectilinear orbits are not supported")
    ang_mom_dir = ang_mom_vec / ang_mom_mag

    # Eccentricity vector
    ecc_vec = np.cross(vel_vec, ang_mom_vec) / gp - pos_dir
    ecc_mag = np.linalg.norm(ecc_vec)

    # Semi-major axis
    sma_inv = 2.0 / pos_mag - np.dot(vel_vec, vel_vec) / gp
    if abs(sma_inv) < eps:
      raise ValueError("Parabolic orbits are not supported")
    sma = 1.0 / sma_inv

    # Perifocal frame
    if ecc_mag > eps:
      ecc_dir = ecc_vec / ecc_mag
    else:
      ecc_dir = pos_dir.copy()
    periapsis_dir = np.cross(ang_mom_dir, ecc_dir)

    # 3-1-3 orbit plane orientation angles
    inc = np.arccos(np.clip(ang_mom_dir[2], -1.0, 1.0))
    if np.hypot(ang_mom_dir[0], ang_mom_dir[1]) > eps:
      raan = np.arctan2(ang_mom_dir[0], -ang_mom_dir[1])
      aop  = np.arctan2(ecc_dir[2], periapsis_dir[2])
    else:
      # Equatorial: node line along the x-axis
      raan = 0.0
      aop  = np.arctan2(np.sign(ang_mom_dir[2]) * ecc_dir[1], ecc_dir[0])

    # Anomalies
    ta = np.arctan2(np.dot(np.cross(ecc_dir, pos_dir), ang_mom_dir), np.dot(ecc_dir, pos_dir))
    ea = None
    ma = None
    if ecc_mag < 1.0:
      ea = OrbitConverter.ta_to_ea(ta, ecc_mag)
      ma = OrbitConverter.ea_to_ma(ea, ecc_mag)

    return {
      'sma'  : float(sma),
      'ecc'  : float(ecc_mag),
      'inc'  : float(inc),
      'raan' : float(raan),
      'aop'  : float(aop),
      'ta'   : float(ta),
      'ea'   : ea,
      'ma'   : ma,
    }

  @staticmethod
  def coe_to_pv(
    coe : dict,
    gp  : float = SOLARSYSTEMCONSTANTS.EARTH.GP,
  ) -> tuple[np.ndarray, np.ndarray]:
    """
    Convert classical orbital elements to position and velocity vectors.

    Input:
    ------
    coe : dict
      sma  : semi-major axis [m]
      ecc  : eccentricity [-]
      inc  : inclination [rad]
      raan : RAAN [rad]
      aop  : argument of periapsis [rad]
      ta   : true anomaly [rad]
    gp : float
      Gravitational parameter [m³/s²]

    Output:
    -------
      pos_vec : np.ndarray
        Position vector [m]
      vel_vec : np.ndarray
        Velocity vector [m/s]
    """
    sma  = coe['sma' ]
    ecc  = coe['ecc' ]
    inc  = coe['inc' ]
    raan = coe['raan']
    aop  = coe['aop' ]
    ta   = coe['ta'  ]

    # Semi-latus rectum, radius, true latitude angle, angular momentum magnitude
    slr         = sma * (1 - ecc**2)
    pos_mag     = slr / (1 + ecc * np.cos(ta))
    theta       = aop + ta
    ang_mom_mag = np.sqrt(gp * slr)

    # Position vector
    pos_vec = np.array([
      pos_mag * (np.cos(raan) * np.cos(theta) - np.sin(raan) * np.sin(theta) * np.cos(inc)),
      pos_mag * (np.sin(raan) * np.cos(theta) + np.cos(raan) * np.sin(theta) * np.cos(inc)),
      pos_mag * (                                              np.sin(theta) * np.sin(inc))
    ])

    # Velocity vector
    vel_vec = np.array([
      -gp / ang_mom_mag * (np.cos(raan) * (np.sin(theta) + ecc * np.sin(aop)) + np.sin(raan) * (np.cos(theta) + ecc * np.cos(aop)) * np.cos(inc)),
      -gp / ang_mom_mag * (np.sin(raan) * (np.sin(theta) + ecc * np.sin(aop)) - np.cos(raan) * (np.cos(theta) + ecc * np.cos(aop)) * np.cos(inc)),
      -gp / ang_mom_mag * (                                                                   -(np.cos(theta) + ecc * np.cos(aop)) * np.sin(inc))
    ])

    return pos_vec, vel_vec

  @staticmethod
  def pv_to_specific_energy(
    pos_vec : np.ndarray,
    vel_vec : np.ndarray,
    gp      : float = SOLARSYSTEMCONSTANTS.EARTH.GP,
  ) -> float:
    """
    Calculate specific mechanical energy from Cartesian state vectors.

    Input:
    ------
      pos_vec : np.ndarray
        Position vector [m].
      vel_vec : np.ndarray
        Velocity vector [m/s].
      gp : float
        Gravitational parameter [m³/s²].

    Output:
    -------
      specific_energy : float
        Specific mechanical energy [m²/s²].
    """
    pos_vec = np.asarray(pos_vec, dtype=float).flatten()
    vel_vec = np.asarray(vel_vec, dtype=float).flatten()

    pos_mag = np.linalg.norm(pos_vec)
    vel_mag = np.linalg.norm(vel_vec)

    specific_energy = vel_mag**2 / 2.0 - gp / pos_mag
    return float(specific_energy)

  @staticmethod
  def pv_to_ang_mom_vec(
    pos_vec : np.ndarray,
    vel_vec : np.ndarray,
  ) -> np.ndarray:
    """
    Specific angular momentum vector [m²/s].
    """
    return np.cross(np.asarray(pos_vec, dtype=float).flatten(), np.asarray(vel_vec, dtype=float).flatten())

  @staticmethod
  def ta_to_ea(
    ta  : float,
    ecc : float,
  ) -> float:
    """
    Maps true anomaly to eccentric anomaly for elliptic orbits.

    Input:
    ------
      ta : float
        True anomaly [rad]
      ecc : float
        Eccentricity (0 <= ecc < 1)

    Output:
    -------
      ea : float
        Eccentric anomaly [rad]
    """
    return float(2 * np.arctan2(np.sqrt(1 - ecc) * np.sin(ta / 2), np.sqrt(1 + ecc) * np.cos(ta / 2)))

  @staticmethod
  def ea_to_ta(
    ea  : float,
    ecc : float,
  ) -> float:
    """
    Maps eccentric anomaly to true anomaly for elliptic orbits.
    """
    return float(2 * np.arctan2(np.sqrt(1 + ecc) * np.sin(ea / 2), np.sqrt(1 - ecc) * np.cos(ea / 2)))

  @staticmethod
  def ea_to_ma(
    ea  : float,
    ecc : float,
  ) -> float:
    """
    Maps eccentric anomaly to mean anomaly, wrapped to [0, 2π).
    """
    return float((ea - ecc * np.sin(ea)) % (2 * np.pi))

  @staticmethod
  def ma_to_ea(
    ma       : float,
    ecc      : float,
    tol      : float = 1e-13,
    max_iter : int   = 50,
  ) -> float:
    """
    Alias for TwoBody_RootSolvers.kepler().
    """
    return TwoBody_RootSolvers.kepler(ma, ecc, tol, max_iter)

  @staticmethod
  def propagate_two_body(
    pos_vec : np.ndarray,
    vel_vec : np.ndarray,
    delta_t : float,
    gp      : float = SOLARSYSTEMCONSTANTS.EARTH.GP,
  ) -> tuple[np.ndarray, np.ndarray]:
    """
    Closed-form Keplerian propagation of an elliptic orbit.

    Input:
    ------
      pos_vec : np.ndarray
        Initial position vector [m].
      vel_vec : np.ndarray
        Initial velocity vector [m/s].
      delta_t : float
        Propagation time [s].
      gp : float
        Gravitational parameter [m³/s²].

    Output:
    -------
      pos_vec : np.ndarray
        Final position vector [m].
      vel_vec : np.ndarray
        Final velocity vector [m/s].

    Raises:
    -------
      ValueError
        If the orbit is not elliptic.
    """
    coe = OrbitConverter.pv_to_coe(pos_vec, vel_vec, gp)
    if coe['ma'] is None:
      raise ValueError("Closed-form propagation requires an elliptic orbit")

    # Advance the mean anomaly
    mean_motion = np.sqrt(gp / coe['sma']**3)
    ma_f        = (coe['ma'] + mean_motion * delta_t) % (2 * np.pi)

    # Back to true anomaly
    ea_f = OrbitConverter.ma_to_ea(ma_f, coe['ecc'])
    ta_f = OrbitConverter.ea_to_ta(ea_f, coe['ecc'])

    return OrbitConverter.coe_to_pv({**coe, 'ta': ta_f}, gp)
