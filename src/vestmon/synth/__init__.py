"""Synthetic signal generators for demo mode.

Modules:
    ppg          -- Piecewise cardiac-cycle PPG waveform
    accel        -- Activity-profile accelerometer windows
    temperature  -- Rate-limited body temperature random walk
"""

from vestmon.synth.ppg import PPGGenerator, ppg_waveform
from vestmon.synth.accel import AccelGenerator, ActivityProfile
from vestmon.synth.temperature import TemperatureSimulator

__all__ = [
    "PPGGenerator",
    "ppg_waveform",
    "AccelGenerator",
    "ActivityProfile",
    "TemperatureSimulator",
]
