"""
Visualization script for the teleop allocation pipeline.
Plots calibration curves, stick sweeps and the effect of saturation scaling.
"""
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.gridspec import GridSpec
import sys
import os

# Add rov_teleop to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from rov_teleop.thrust_calibration import PORT_STBD_CURVE, VERTICAL_CURVE, thrust_percent
from rov_teleop.saturation_limiter import limit_saturation, apply_scale
from rov_teleop.teleop_engine import TeleopEngine
from rov_teleop.joy_input import JoySample


def plot_calibration_curves():
    """Plot force -> percent thrust for both thruster models."""
    print("Generating calibration curve plots...")

    forces = np.linspace(-20.0, 20.0, 401)
    port_stbd = [thrust_percent(f, PORT_STBD_CURVE) for f in forces]
    vertical = [thrust_percent(f, VERTICAL_CURVE) for f in forces]

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(forces, port_stbd, 'b-', label='Port/Stbd (2308.60)', linewidth=2)
    ax.plot(forces, vertical, 'r--', label='Vertical (2303.57)', linewidth=2)
    ax.axhspan(-1.0, 1.0, color='green', alpha=0.08, label='Valid command range')
    ax.set_xlabel('Desired force [N]')
    ax.set_ylabel('Percent thrust [-]')
    ax.set_title('Thruster Calibration Curves')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig('calibration_curves.png', dpi=150, bbox_inches='tight')
    print("  Saved: calibration_curves.png")
    plt.close()


def plot_stick_sweeps():
    """Plot ESC pulse widths while sweeping surge and yaw sticks."""
    print("Generating stick sweep plots...")

    engine = TeleopEngine()
    deflection = np.linspace(-1.0, 1.0, 201)

    fig = plt.figure(figsize=(15, 10))
    gs = GridSpec(2, 2, figure=fig)

    sweeps = [
        ('Surge sweep', lambda a: JoySample(surge=a)),
        ('Yaw sweep', lambda a: JoySample(yaw=a)),
        ('Heave sweep', lambda a: JoySample(heave=a)),
        ('Surge sweep at full yaw', lambda a: JoySample(surge=a, yaw=1.0)),
    ]

    for idx, (title, make_sample) in enumerate(sweeps):
        commands = np.array([engine.compute_command(make_sample(float(a))).as_list()
                             for a in deflection])

        ax = fig.add_subplot(gs[idx // 2, idx % 2])
        ax.plot(deflection, commands[:, 0], 'b-', label='Port')
        ax.plot(deflection, commands[:, 1], 'g-', label='Vert')
        ax.plot(deflection, commands[:, 2], 'r-', label='Stbd')
        ax.set_xlabel('Stick deflection [-]')
        ax.set_ylabel('Pulse width [µs]')
        ax.set_ylim(950, 2050)
        ax.set_title(title)
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig('stick_sweeps.png', dpi=150, bbox_inches='tight')
    print("  Saved: stick_sweeps.png")
    plt.close()


def plot_saturation_scaling():
    """Compare uniform scaling with independent clipping of saturated commands."""
    print("Generating saturation comparison plots...")

    requested = np.array([1.5, 0.2, -0.3])
    scale = limit_saturation(*requested)
    scaled = np.array(apply_scale(requested, scale))
    clipped = np.clip(requested, -1.0, 1.0)

    labels = ['Port', 'Vert', 'Stbd']
    x = np.arange(len(labels))
    width = 0.25

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.bar(x - width, requested, width, label='Requested')
    ax.bar(x, scaled, width, label=f'Scaled (factor {scale:.3f})')
    ax.bar(x + width, clipped, width, label='Clipped')
    ax.axhline(1.0, color='k', linestyle=':')
    ax.axhline(-1.0, color='k', linestyle=':')
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylabel('Percent thrust [-]')
    ax.set_title('Saturation Handling')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig('saturation_scaling.png', dpi=150, bbox_inches='tight')
    print("  Saved: saturation_scaling.png")
    plt.close()


def main():
    """Generate all plots."""
    print("\n" + "="*60)
    print("Teleop Allocation Visualization")
    print("="*60 + "\n")

    plot_calibration_curves()
    plot_stick_sweeps()
    plot_saturation_scaling()

    print("\n" + "="*60)
    print("All plots generated successfully!")
    print("="*60 + "\n")


if __name__ == "__main__":
    main()
