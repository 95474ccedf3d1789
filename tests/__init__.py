"""
Test suite for the Robot Chicken simulation core.

This package contains unit tests organized by component:
- test_dynamics.py: Tests for the dynamics models
- test_agent.py: Tests for the Agent wrapper
- test_obstacle.py: Tests for obstacles and proximity evaluation
- test_driver_config.py: Tests for DriverConfig
- test_simulation.py: Tests for the simulation driver
- test_trial_analysis.py: Tests for trace recording and trial analysis
- test_integration.py: Integration tests for full sessions
"""
