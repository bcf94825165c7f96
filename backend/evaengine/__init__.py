"""EvaMap engine: evaporation power, climate projection and regional energy models."""
