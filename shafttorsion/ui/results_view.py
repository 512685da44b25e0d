from __future__ import annotations
import numpy as np

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QLabel
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from ..core.torsion import ShaftResult

RESULT_TYPES = ("Torsion T", "Torsion τ")


class ResultsView(QWidget):
    def __init__(self):
        super().__init__()
        lay = QVBoxLayout(self)
        lay.setContentsMargins(6, 6, 6, 6)
        lay.setSpacing(6)

        self.title = QLabel("Results")
        lay.addWidget(self.title)

        self.fig = Figure(figsize=(7, 4), dpi=100)
        self.canvas = FigureCanvas(self.fig)
        lay.addWidget(self.canvas, 1)

    def clear(self):
        self.fig.clear()
        self.title.setText("Results")
        self.canvas.draw()

    def set_data(self, out: ShaftResult, rtype: str):
        self.fig.clear()
        ax = self.fig.add_subplot(111)
        self.title.setText(f"Results - {rtype} ({out.section_count} sections)")

        x = np.asarray(out.x_diag, dtype=float)
        if rtype == "Torsion T":
            y = np.asarray(out.T, dtype=float)
            ax.set_ylabel("T (N·m)")
            ax.set_title("Internal torque")
        else:
            y = np.asarray(out.tau, dtype=float) / 1e6
            ax.set_ylabel("tau (MPa)")
            ax.set_title("Torsion shear stress T/W")

        ax.plot(x, y)
        ax.axhline(0, linewidth=1, color="#d3d3d3", linestyle="--")
        x0 = 0.0
        for r in out.sections:
            ax.axvline(x0, linewidth=0.8, color="#d3d3d3")
            x0 += r.length
        ax.axvline(x0, linewidth=0.8, color="#d3d3d3")
        ax.set_xlabel("x (m)")
        if y.size:
            idx = int(np.argmax(np.abs(y)))
            ax.annotate(f"max {y[idx]:.3f}", (x[idx], y[idx]))

        self.fig.tight_layout()
        self.canvas.draw()
