#!/usr/bin/env python3
"""Scan the |A|² lineshape of one K-matrix family on one output channel.

Each pole is switched on alone (beta_a = 1, all others 0) so the table
shows where every pole peaks once coupled-channel effects are included.

Usage:
    python scripts/scan_lineshape.py [family] [channel]

    family   f0, f2, a0, a2 or pi1 (default a0)
    channel  output channel index (default 0)
"""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
from pwa_kmatrix import Dataset, resonance_amplitude

family = sys.argv[1] if len(sys.argv) > 1 else 'a0'
channel = int(sys.argv[2]) if len(sys.argv) > 2 else 0

amplitude = resonance_amplitude(family, channel, verbose=True)
table = amplitude.table
n_poles = amplitude.n_poles

masses = np.arange(0.30, 2.51, 0.05)
dataset = Dataset.from_invariant_masses(masses * masses)
amplitude.precalculate(dataset)

print()
print(f'{table.name} ({table.description}) on {table.parameters.channels[channel].name}')
header = f'{"m [GeV]":>8}' + ''.join(f'{name:>12}' for name in table.pole_names)
print(header)
print('-' * len(header))

peaks = {}
intensities = []
for a, name in enumerate(table.pole_names):
    parameters = [0.0] * (2 * n_poles)
    parameters[2 * a] = 1.0
    intensity = np.abs(amplitude.calculate_all(parameters)) ** 2
    intensities.append(intensity)
    k = int(np.argmax(intensity))
    peaks[name] = (masses[k], intensity[k])

for k, m in enumerate(masses):
    print(f'{m:>8.3f}' + ''.join(f'{intensity[k]:>12.4g}' for intensity in intensities))

print()
print('Peak positions:')
for name, (m, peak) in peaks.items():
    print(f'  {name:<10} m = {m:.3f} GeV   |A|^2 = {peak:.4g}')
