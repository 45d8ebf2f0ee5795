"""
Force Catalog
=============

Resolves the inputs shared by both force stacks once (μ, a_e, tide system,
central body, Sun, third bodies, atmosphere, spacecraft models, gravity
providers) and hands out two independent, ordered force-model lists:

  as_numerical()                          as_dsst()
  ---------------------------------       ---------------------------------
  1. DragForce (NRLMSISE-00)              1. DSSTAtmosphericDrag
  2. ThirdBodyAttraction (per body)       2. DSSTSolarRadiationPressure
  3. SolidTides (tide bodies)             3. DSSTThirdBody (per body)
  4. SolarRadiationPressure               4. DSSTTesseral, DSSTZonal
  5. HolmesFeatherstoneAttractionModel    5. DSSTNewtonianAttraction
  6. Relativity (optional)
  7. NewtonianAttraction

Each call builds new force-model objects, so the two propagators never share
a force model; they only share its inputs.
"""
from orbit_comparator.model.orekit_context import start_orekit_vm
from orbit_comparator.model.environment    import Environment
from orbit_comparator.input.configuration  import ForceModelConfiguration

start_orekit_vm()

from org.orekit.forces.drag                            import DragForce, IsotropicDrag
from org.orekit.forces.gravity                         import HolmesFeatherstoneAttractionModel, NewtonianAttraction, Relativity, SolidTides, ThirdBodyAttraction
from org.orekit.forces.radiation                       import IsotropicRadiationSingleCoefficient, SolarRadiationPressure
from org.orekit.models.earth.atmosphere                import NRLMSISE00
from org.orekit.models.earth.atmosphere.data           import CssiSpaceWeatherData
from org.orekit.propagation.semianalytical.dsst.forces import DSSTAtmosphericDrag, DSSTNewtonianAttraction, DSSTSolarRadiationPressure, DSSTTesseral, DSSTThirdBody, DSSTZonal
from org.orekit.utils                                  import Constants, IERSConventions


class ForceCatalog:
  """
  Shared force-model inputs with a numerical and a DSST adapter.

  Attributes:
  -----------
    mu : float
      Central attraction coefficient of the gravity field [m³/s²].
    ae : float
      Reference radius of the gravity field [m].
    third_bodies : tuple[CelestialBody]
      Third bodies, in configuration order.
    tide_bodies : tuple[CelestialBody]
      Third bodies contributing to the solid tides, in configuration order.
    atmosphere : NRLMSISE00 | None
      Atmosphere, when drag is configured.
  """

  def __init__(
    self,
    force_config : ForceModelConfiguration,
    environment  : Environment,
  ):
    data_context     = environment.data_context
    celestial_bodies = data_context.getCelestialBodies()
    time_scales      = data_context.getTimeScales()

    self.force_config               = force_config
    self.central_body               = environment.central_body
    self.normalized_gravity_field   = environment.normalized_gravity_field
    self.unnormalized_gravity_field = environment.unnormalized_gravity_field

    # Gravity field constants, shared by every force model
    self.mu          = self.normalized_gravity_field.getMu()
    self.ae          = self.normalized_gravity_field.getAe()
    self.tide_system = self.normalized_gravity_field.getTideSystem()

    # Celestial bodies
    self.sun          = celestial_bodies.getSun()
    self.third_bodies = tuple(
      celestial_bodies.getBody(third_body.name) for third_body in force_config.third_bodies
    )
    self.tide_bodies  = tuple(
      body for body, third_body in zip(self.third_bodies, force_config.third_bodies) if third_body.with_solid_tides
    )
    self.ut1 = time_scales.getUT1(IERSConventions.IERS_2010, True)

    # Atmosphere and drag-sensitive spacecraft
    self.atmosphere      = None
    self.drag_spacecraft = None
    if force_config.drag is not None:
      utc           = time_scales.getUTC()
      space_weather = CssiSpaceWeatherData(
        CssiSpaceWeatherData.DEFAULT_SUPPORTED_NAMES,
        data_context.getDataProvidersManager(),
        utc,
      )
      self.atmosphere      = NRLMSISE00(space_weather, self.sun, self.central_body, utc)
      self.drag_spacecraft = IsotropicDrag(force_config.drag.area, force_config.drag.cd)

    # Radiation-sensitive spacecraft
    self.radiation_spacecraft = None
    if force_config.solar_radiation_pressure is not None:
      self.radiation_spacecraft = IsotropicRadiationSingleCoefficient(
        force_config.solar_radiation_pressure.area,
        force_config.solar_radiation_pressure.cr,
      )

  @property
  def has_solid_tides(self) -> bool:
    return len(self.tide_bodies) > 0

  @property
  def has_harmonics(self) -> bool:
    return self.force_config.gravity.is_enabled

  @property
  def body_frame(self):
    return self.central_body.getBodyFrame()

  def _build_drag_force(self) -> DragForce:
    return DragForce(self.atmosphere, self.drag_spacecraft)

  def as_numerical(self) -> list:
    """
    Build the ordered force models of the numerical (Cowell) propagator.

    Output:
    -------
      force_models : list[ForceModel]
        Force models in insertion order. The Newtonian attraction is last.
    """
    force_models = []
    print("\nNumerical Force Models")

    # Drag
    if self.atmosphere is not None:
      print(f"  Adding Drag                 : NRLMSISE-00, area {self.force_config.drag.area} m², cd {self.force_config.drag.cd}")
      force_models.append(self._build_drag_force())

    # Third bodies
    for body in self.third_bodies:
      print(f"  Adding Third Body           : {body.getName()}")
      force_models.append(ThirdBodyAttraction(body))

    # Solid tides
    if self.has_solid_tides:
      print(f"  Adding Solid Tides          : {', '.join(str(body.getName()) for body in self.tide_bodies)}")
      force_models.append(SolidTides(
        self.body_frame,
        self.ae,
        self.mu,
        self.tide_system,
        IERSConventions.IERS_2010,
        self.ut1,
        *self.tide_bodies,
      ))

    # Solar radiation pressure
    if self.radiation_spacecraft is not None:
      srp_config = self.force_config.solar_radiation_pressure
      print(f"  Adding SRP                  : area {srp_config.area} m², cr {srp_config.cr}")
      force_models.append(SolarRadiationPressure(self.sun, self.central_body, self.radiation_spacecraft))

    # Non-spherical gravity
    if self.has_harmonics:
      print(f"  Adding Holmes-Featherstone  : degree {self.normalized_gravity_field.getMaxDegree()}, order {self.normalized_gravity_field.getMaxOrder()}")
      force_models.append(HolmesFeatherstoneAttractionModel(self.body_frame, self.normalized_gravity_field))

    # Post-Newtonian correction
    if self.force_config.relativity.is_used:
      print(f"  Adding Relativity           : Schwarzschild")
      force_models.append(Relativity(self.mu))

    # Central attraction
    print(f"  Adding Newtonian Attraction : mu {self.mu} m³/s²")
    force_models.append(NewtonianAttraction(self.mu))

    return force_models

  def as_dsst(self) -> list:
    """
    Build the ordered force models of the DSST propagator.

    Output:
    -------
      force_models : list[DSSTForceModel]
        Force models in insertion order. The Newtonian attraction is last.
    """
    force_models = []
    print("\nDSST Force Models")

    # Drag
    if self.atmosphere is not None:
      print(f"  Adding Drag                 : NRLMSISE-00, area {self.force_config.drag.area} m², cd {self.force_config.drag.cd}")
      force_models.append(DSSTAtmosphericDrag(self._build_drag_force(), self.mu))

    # Solar radiation pressure
    if self.radiation_spacecraft is not None:
      srp_config = self.force_config.solar_radiation_pressure
      print(f"  Adding SRP                  : area {srp_config.area} m², cr {srp_config.cr}")
      force_models.append(DSSTSolarRadiationPressure(self.sun, self.central_body, self.radiation_spacecraft, self.mu))

    # Third bodies (no solid tides counterpart)
    for body in self.third_bodies:
      print(f"  Adding Third Body           : {body.getName()}")
      force_models.append(DSSTThirdBody(body, self.mu))

    # Zonal and tesseral harmonics
    if self.has_harmonics:
      print(f"  Adding Tesseral             : degree {self.unnormalized_gravity_field.getMaxDegree()}, order {self.unnormalized_gravity_field.getMaxOrder()}")
      force_models.append(DSSTTesseral(
        self.body_frame,
        Constants.WGS84_EARTH_ANGULAR_VELOCITY,
        self.unnormalized_gravity_field,
      ))
      print(f"  Adding Zonal                : degree {self.unnormalized_gravity_field.getMaxDegree()}")
      force_models.append(DSSTZonal(self.unnormalized_gravity_field))

    if self.force_config.relativity.is_used:
      print(f"  Skipping Relativity         : no DSST counterpart")

    # Central attraction
    print(f"  Adding Newtonian Attraction : mu {self.mu} m³/s²")
    force_models.append(DSSTNewtonianAttraction(self.mu))

    return force_models
