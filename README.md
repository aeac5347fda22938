# astrosim

Building blocks for a modular spacecraft simulation. Modules exchange
message objects through `Output` and `Input` slots. A `Simulation` runs
them on fixed periods, ordered by priority. Sensor and battery models turn
spacecraft state into measurements, and recorders write any message to
JSON lines or CSV.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Contents

### `astrosim.core`

- `SimulationContext`: a frozen dataclass with `current_sim_nanos` (an int)
  and `current_epoch` (a `datetime`). Every update receives one.
- `Module`: an abstract base class with `init()` and `update(context)`.
- `Output(initial)`: a message slot. `write(value)` replaces the message and
  `read()` returns a deep copy of it.
- `Input(default_factory)`: a reader of an `Output`.
  - `connect(output)` attaches it to an output.
  - `is_connected()` says whether it has been attached.
  - `read()` returns the connected message. While unconnected it returns
    `default_factory()`.

### `astrosim.simulation`

`Simulation(start_epoch, show_progress=False)`:

- `add_module(name, module, period_nanos, priority)` registers a module.
- `connect(output, input_)` wires an output to an input.
- `initialize()` sorts the modules by priority, then by insertion order, and
  calls `init()` on each. It does this only once.
- `run_for(duration_nanos)` advances simulated time.
  - It calls it `initialize()` first.
  - Each module is updated when its next run time is reached.
  - On the last tick, a module that is part-way through its period also
    fires, so the run ends exactly at the stop time.
  - Every module runs at time zero.
  - A negative duration raises `ValueError`.
  - Running with no modules past time zero raises `RuntimeError`.
  - With `show_progress=True`, a `tqdm` progress bar is shown.
- `current_sim_nanos()`, `current_epoch()`, `start_epoch()` and `context()`
  report the current time.
- `module_names()` lists the modules in scheduling order.
- `module_timings()` returns a `ModuleTiming` for each module, most
  expensive first. Each has the name, priority, number of updates and total
  update wall-clock nanoseconds. Wall-clock time is measured only after
  `set_timing_enabled(True)`.

### `astrosim.rotations`

- `Quaternion(w, x, y, z)`, with:
  - the constructors `identity()`, `from_euler_angles(roll, pitch, yaw)`,
    `from_scaled_axis(axis_angle)` and `from_mrp(sigma)`;
  - `normalized()` and `inverse()`;
  - `*` for composition;
  - `rotate(vector)` and `to_rotation_matrix()`.
- MRP helpers:
  - `cross_matrix(vector)`;
  - `body_to_inertial_dcm_from_sigma_bn(sigma_bn)`;
  - `shadow_mrp(sigma_bn)`, which switches to the shadow set when the norm
    exceeds one;
  - `mrp_b_matrix(sigma_bn)`;
  - `mrp_kinematics(sigma_bn, omega_radps)`.

### `astrosim.messages`

These are dataclasses with zero defaults. Each has a `flatten()` that
returns `TelemetryField`s in a fixed order.

- `messages.state`:
  - `SpacecraftStateMsg`, which also has `body_to_inertial()` and
    `inertial_to_body()` quaternions;
  - `SpacecraftMassPropsMsg`;
  - `SpacecraftDiagnosticsMsg`;
  - `PlanetStateMsg`.
- `messages.environment`:
  - `AtmosphereMsg`;
  - `EclipseMsg`;
  - `MagneticFieldMsg`;
  - `SolarFluxMsg`;
  - `SunEphemerisMsg`;
  - `SunLineMsg`.
- `messages.sensors`:
  - `GpsMsg`;
  - `ImuMsg`;
  - `StarTrackerMsg`;
  - `SunSensorMsg`;
  - `TamMsg`.
- `messages.commands`:
  - `AttitudeGuidanceMsg`;
  - `AttitudeReferenceMsg`;
  - `BodyTorqueCommandMsg`;
  - `TranslationReferenceMsg`;
  - `ArrayMotorTorqueMsg`, which also has `first_torque_nm()`;
  - `ReactionWheelCommandMsg`;
  - `ThrusterCommandMsg`;
  - `MtbCommandMsg`;
  - `HingedRigidBodyMsg`.
- `messages.power`:
  - `PowerNodeUsageMsg`;
  - `PowerStorageFaultMsg`, whose default `fault_capacity_ratio` is 1.0;
  - `PowerStorageStatusMsg`.

### `astrosim.telemetry`

- `TelemetryField(path, value)` and `RecordedSample`.
- The `TelemetryMessage` interface.
- `vector_fields(prefix, vector)`.
- `Recorder(RecorderConfig(topic, output_path), default_factory)` is a
  module. Each update appends one compact JSON line with the simulation
  time, the topic and the flattened input message. Non-finite values are
  written as `null`.
- `CsvRecorder(CsvRecorderConfig(topic, output_path), default_factory)` is a
  module.
  - It writes a header from the first message's field paths, after
    `sim_time_nanos,sim_time_s`.
  - It then appends one row per update, with values to 12 decimal places.
- Both recorders create the output directory in `init()`.

### `astrosim.sensors`

Each sensor reads a `SpacecraftStateMsg` through `input_state_msg`.

- `imu.Imu(ImuConfig(...))` rotates the body rate into the sensor frame and
  adds Gaussian noise per axis. The noise generator is seeded with zero.
- `tam.Tam(TamConfig(...))` is a magnetometer. It rotates the inertial
  field into the sensor frame, then applies:
  - a bounded random-walk error;
  - a bias;
  - a scale factor;
  - saturation between `min_output_t` and `max_output_t`.

  `tam.seed_from_name(name)` derives the stable 64-bit seed used by the
  named sensors.
- `gps.Gps(GpsConfig(...))` adds a six-state random-walk error to position
  and velocity. When `cross_trans` is set, that error can carry velocity
  error into position. The output also holds the GPS week and seconds of
  week. `gps.gps_time_of_week(epoch)` computes both from a UTC epoch, using
  a built-in leap-second table.
- `star_tracker.StarTracker(StarTrackerConfig(...))` reports the
  inertial-to-sensor quaternion, perturbed by a bounded random-walk
  rotation vector.
- `sun_sensor.SunSensor(SunSensorConfig(...))` is a coarse sun sensor. It
  also reads `input_sun_msg` and, optionally, `input_eclipse_msg`. Its
  signal is:
  - a cosine response inside the field of view;
  - times an optional Kelly fit;
  - times inverse-square distance scaling to 1 AU;
  - times the eclipse factor.

  It then adds a bias and noise, applies the scale factor and clamps to the
  output range.

### `astrosim.power`

`simple_battery.SimpleBattery(SimpleBatteryConfig(name, storage_capacity_j, stored_charge_init_j))`:

- Each update integrates the summed net power of the inputs returned by
  `add_power_node_to_model()`.
- The charge is kept between zero and the capacity. A connected
  `battery_fault_in_msg` further limits it to capacity times
  `fault_capacity_ratio`.
- With no power nodes it writes an all-zero status.
- Invalid configuration or fault ratios raise `ValueError`.

## Example

```python
from datetime import datetime

from astrosim.core import Output
from astrosim.messages.state import SpacecraftStateMsg
from astrosim.rotations import Quaternion
from astrosim.sensors.imu import Imu, ImuConfig
from astrosim.simulation import Simulation

state = Output(SpacecraftStateMsg(omega_radps=[0.01, 0.02, 0.03]))
imu = Imu(ImuConfig(
    name="imu_1",
    body_to_sensor_quaternion=Quaternion.identity(),
))

sim = Simulation(datetime(2025, 1, 1), False)
sim.connect(state, imu.input_state_msg)
sim.add_module("imu", imu, 5_000_000, 10)
sim.run_for(1_000_000_000)

print(imu.output_imu_msg.read().angular_rate_sensor_radps)
print(sim.module_names())
```

## What this package does not do

There is no spacecraft dynamics module. Nothing here integrates orbits or
attitude, or models gravity, actuators or effectors.

There are no environment models that produce sun ephemerides, magnetic
fields, atmosphere or eclipse data.

These message types exist, but their values must be written into `Output`
slots by your own code or modules. There is no command-line tool.