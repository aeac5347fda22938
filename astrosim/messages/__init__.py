"""Message dataclasses for state, environment, sensors, commands and power, each flattening to telemetry fields."""