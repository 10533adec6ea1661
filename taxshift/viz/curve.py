from typing import Iterable, Tuple, Optional, Dict, Any
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


def plot_curve(
    points: Iterable[Tuple[float, float]],
    out_path: str,
    annotations: Optional[Dict[str, Any]] = None,
):
    """
    points: iterable of (movement, total_tax)
    annotations (optional):
      {
        "baseline_total": float,     # horizontal reference line
        "best_movement": float,
        "best_total": float,
        "label": str,                # text near the optimum
      }
    """
    points = list(points)
    xs = [float(x) for x, _ in points]
    ys = [float(y) for _, y in points]

    plt.figure()
    plt.plot(xs, ys)
    plt.xlabel("Movement (bonus moved into salary)")
    plt.ylabel("Total tax")
    plt.title("Total tax by movement")

    if annotations:
        ax = plt.gca()
        base = annotations.get("baseline_total", None)
        b_mov = annotations.get("best_movement", None)
        b_tot = annotations.get("best_total", None)
        label = annotations.get("label", "Optimum")

        if base is not None:
            ax.axhline(float(base), linestyle=":", lw=0.8)

        if b_mov is not None:
            ax.axvline(float(b_mov), linestyle="--")
            if b_tot is not None:
                ax.scatter([float(b_mov)], [float(b_tot)])
                ax.annotate(
                    label,
                    xy=(float(b_mov), float(b_tot)),
                    xytext=(10, 12),
                    textcoords="offset points",
                    arrowprops=dict(arrowstyle="->", lw=0.8),
                )

    plt.tight_layout()
    plt.savefig(out_path, dpi=150)
    plt.close()
