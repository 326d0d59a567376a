"""
Test suite for the Roller Racer Simulation.

This package contains unit tests organized by component:
- test_linalg.py: Tests for the Gaussian elimination solver
- test_integrator.py: Tests for the fixed-step integrator
- test_racer_params.py: Tests for RacerParams validation and derived values
- test_dynamics.py: Tests for the vehicle equations of motion
- test_simulation.py: Tests for simulation execution
- test_telemetry_analysis.py: Tests for post-run analysis
- test_integration.py: Integration tests for the steer sweep workflow
"""
