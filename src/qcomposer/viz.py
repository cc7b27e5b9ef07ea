import numpy as np
import matplotlib.pyplot as plt

from .bloch import BlochVector


def plot_probabilities(probs: dict[str, float], *, title: str = "Measurement probabilities"):

    if not probs:
        raise ValueError("probs is empty")

    labels = sorted(probs)
    values = [probs[k] for k in labels]

    fig = plt.figure()
    plt.bar(range(len(values)), values)
    plt.xticks(range(len(values)), labels, rotation=90)
    plt.ylim(0.0, 1.0)
    plt.ylabel("Probability")
    plt.title(title)
    plt.tight_layout()
    return fig


def plot_result(result, *, title: str = "Measurement probabilities"):
    return plot_probabilities(result.probabilities, title=title)


def plot_bloch_sphere(v: BlochVector, *, title: str = "bloch sphere"):

    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")

    u = np.linspace(0, 2*np.pi, 60)
    t = np.linspace(0, np.pi, 60)
    xs = np.outer(np.cos(u), np.sin(t))
    ys = np.outer(np.sin(u), np.sin(t))
    zs = np.outer(np.ones_like(u), np.cos(t))
    ax.plot_surface(xs, ys, zs, alpha=0.15, linewidth=0)

    ax.plot([-1, 1], [0, 0], [0, 0])
    ax.plot([0, 0], [-1, 1], [0, 0])
    ax.plot([0, 0], [0, 0], [-1, 1])

    ax.quiver(0, 0, 0, v.x, v.y, v.z, length=1.0, normalize=False)

    ax.set_xlim([-1, 1]); ax.set_ylim([-1, 1]); ax.set_zlim([-1, 1])
    ax.set_xlabel("X"); ax.set_ylabel("Y"); ax.set_zlabel("Z")
    ax.set_title(f"{title} (qubit {v.qubit})" if v.qubit >= 0 else title)
    plt.tight_layout()
    return fig
