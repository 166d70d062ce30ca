import sys
import argparse

import numpy as np
from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QWidget, QHBoxLayout, QTextEdit,
    QVBoxLayout, QLabel, QPushButton, QInputDialog
)
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from Nodes.Point import Point
from Nodes.Rectangle import Rectangle
from trees.KD_tree import KdTree
from trees.kd_plot import draw_kdtree
from trees.logger import logger, set_debug
from trees.metrics import benchmark_kdtree, analyze_kdtree_instance
from trees.osm_loader import fetch_pois_by_bbox, project_to_unit_square

# consultas fijas que se muestran tras cada inserción
QUERY_RECT = Rectangle(0.0, 0.0, 0.5, 0.5)
QUERY_CENTER = Point(0.5, 0.5)


class KdTreeWindow(QMainWindow):
    def __init__(self, tree=None):
        super().__init__()

        self.setWindowTitle("2d-tree: inserción, rango y vecino más cercano")
        self.setGeometry(300, 200, 1400, 900)

        self.tree = tree if tree is not None else KdTree()
        self.last_point = Point(0.0, 0.0)
        self.center = (6.24, -75.58)

        # ========= LIENZO =========
        self.fig = Figure(figsize=(6, 6))
        self.canvas = FigureCanvas(self.fig)
        self.canvas.mpl_connect('button_press_event', self.on_click)

        # ========= PANEL LATERAL =========
        text_panel = QTextEdit()
        text_panel.setPlaceholderText("Resultados de la consulta...")
        text_panel.setReadOnly(True)

        label = QLabel("Panel de información:")
        label.setStyleSheet("font-size: 16px; font-weight: bold;")

        info_label = QLabel("Haz clic dentro del cuadrado para insertar un punto.\n"
                            "Rojo: división por x. Azul: división por y.")
        info_label.setWordWrap(True)

        btn_clear = QPushButton("Limpiar árbol")
        btn_clear.clicked.connect(self.clear_tree)

        btn_random = QPushButton("Puntos aleatorios")
        btn_random.clicked.connect(self.ask_random_points)

        btn_load_pois = QPushButton("Cargar POIs (OSM)")
        btn_load_pois.clicked.connect(self.show_category_dialog)

        btn_metrics = QPushButton("Ejecutar Métricas")
        btn_metrics.clicked.connect(self.run_metrics)

        side_layout = QVBoxLayout()
        side_layout.addWidget(label)
        side_layout.addWidget(info_label)
        side_layout.addWidget(btn_clear)
        side_layout.addWidget(btn_random)
        side_layout.addWidget(btn_load_pois)
        side_layout.addWidget(btn_metrics)
        side_layout.addWidget(text_panel)

        self.text_panel = text_panel

        side_widget = QWidget()
        side_widget.setLayout(side_layout)

        main_layout = QHBoxLayout()
        main_layout.addWidget(self.canvas, 3)
        main_layout.addWidget(side_widget, 1)

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        self.redraw()

    def on_click(self, event):
        if event.xdata is None or event.ydata is None:
            return
        p = Point(float(event.xdata), float(event.ydata))
        # ignorar clics repetidos en la misma columna
        if not self.tree.domain.contains(p) or p.x == self.last_point.x:
            return
        logger.info("New point: %8.6f %8.6f", p.x, p.y)
        self.tree.insert(p)
        self.last_point = p
        self.redraw()

    def redraw(self):
        self.fig.clear()
        ax = self.fig.add_subplot(1, 1, 1)
        nearest = self.tree.nearest(QUERY_CENTER) if not self.tree.is_empty() else None
        draw_kdtree(self.tree, ax, highlight=nearest, query_rect=QUERY_RECT)
        self.canvas.draw()
        self.show_queries(nearest)

    def show_queries(self, nearest):
        lines = [f"Puntos en el árbol: {self.tree.size()}", "",
                 "Puntos en el cuadrante inferior izquierdo:"]
        for point in self.tree.range(QUERY_RECT):
            lines.append(f"{point.x:.6f}:{point.y:.6f}")
        if nearest is not None:
            lines.append("")
            lines.append(f"Punto más cercano al centro: {nearest.x:.6f}:{nearest.y:.6f}")
        self.text_panel.setPlainText("\n".join(lines))

    def clear_tree(self):
        self.tree = KdTree(domain=self.tree.domain)
        self.last_point = Point(0.0, 0.0)
        self.redraw()

    def ask_random_points(self):
        n, ok = QInputDialog.getInt(self, 'Puntos aleatorios', 'Número de puntos:', 50, 1, 5000, 10)
        if not ok:
            return
        add_random_points(self.tree, n)
        self.redraw()

    def show_category_dialog(self):
        categories = [
            'restaurant', 'cafe', 'bar', 'fast_food', 'pub', 'bank', 'atm', 'hospital',
            'pharmacy', 'school', 'university', 'supermarket', 'hotel', 'parking',
            'fuel', 'library', 'cinema', 'police', 'bakery'
        ]
        cat, ok = QInputDialog.getItem(self, 'Seleccionar categoría', 'Categoría OSM:', categories, 0, True)
        if not ok or not cat:
            return
        sizes = [
            ('Pequeña (~0.5 km)', 0.005),
            ('Mediana (~1 km)', 0.01),
            ('Grande (~5 km)', 0.05)
        ]
        labels = [s[0] for s in sizes]
        choice, ok2 = QInputDialog.getItem(self, 'Tamaño del área', 'Selecciona tamaño de búsqueda:', labels, 1, False)
        bbox_delta = dict(sizes)[choice] if ok2 and choice else 0.01
        self.load_osm_pois(amenity=cat, bbox_delta=bbox_delta)

    def load_osm_pois(self, amenity='restaurant', bbox_delta=0.01, limit=300):
        lat_center, lon_center = self.center
        bbox = (lat_center - bbox_delta, lon_center - bbox_delta,
                lat_center + bbox_delta, lon_center + bbox_delta)
        self.text_panel.setPlainText(f'Descargando POIs alrededor de {lat_center:.5f}, {lon_center:.5f} (±{bbox_delta})...')
        try:
            pois = fetch_pois_by_bbox(bbox, amenity=amenity, limit=limit)
        except RuntimeError as e:
            self.text_panel.setPlainText(f'Error al descargar POIs: {e}')
            return

        points = project_to_unit_square(pois, bbox)
        for p in points:
            self.tree.insert(p)
        logger.info("loaded %d POIs (amenity=%s)", len(points), amenity)
        self.redraw()

    def run_metrics(self):
        choices = ['Sintético (crear datos aleatorios)', 'KD-Tree (usar datos actuales)']
        choice, ok = QInputDialog.getItem(self, 'Fuente de datos para benchmark', 'Selecciona fuente de datos:', choices, 0, False)
        if not ok or not choice:
            choice = choices[0]

        self.text_panel.setPlainText('Ejecutando benchmarks... esto puede tardar unos segundos.')
        if choice == choices[0]:
            res = benchmark_kdtree()
        else:
            res = analyze_kdtree_instance(self.tree)

        self.fig.clear()
        x = np.arange(len(res['sizes']))
        width = 0.35

        ax1 = self.fig.add_subplot(2, 1, 1)
        ax1.bar(x, res['heights'], 0.4, label='Altura')
        ax1.plot(x, np.log2(np.maximum(res['sizes'], 1)), 'k--', label='log2(N)')
        ax1.set_xticks(x)
        ax1.set_xticklabels([str(s) for s in res['sizes']])
        ax1.set_ylabel('Altura del árbol')
        ax1.legend()

        ax2 = self.fig.add_subplot(2, 1, 2)
        ax2.bar(x - width/2, res['nearest_times'], width, label='KD-Tree nearest')
        ax2.bar(x + width/2, res['brute_force_times'], width, label='Barrido lineal')
        ax2.set_xticks(x)
        ax2.set_xticklabels([str(s) for s in res['sizes']])
        ax2.set_xlabel('N (nº de inserciones)')
        ax2.set_ylabel('Tiempo (s)')
        ax2.legend()

        self.canvas.draw()

        lines = ["Benchmarks completos. Ver gráficos.", ""]
        for s, t, m, h, bad in zip(res['sizes'], res['times'], res['mem_peaks'], res['heights'], res['mismatches']):
            lines.append(f"N={s}: time={t:.4f}s, mem_peak={m/1024:.1f} KiB, height={h}, mismatches={bad}")
        self.text_panel.setPlainText("\n".join(lines))


def add_random_points(tree, n, seed=None):
    rng = np.random.default_rng(seed)
    for x, y in rng.random((n, 2)):
        tree.insert(Point(float(x), float(y)))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Explorador interactivo de un 2d-tree")
    parser.add_argument('--random', type=int, default=0, help='puntos aleatorios iniciales')
    parser.add_argument('--seed', type=int, default=None, help='semilla para los puntos aleatorios')
    parser.add_argument('--debug', action='store_true', help='activa el log en nivel DEBUG')
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    set_debug(args.debug)
    tree = KdTree()
    if args.random:
        add_random_points(tree, args.random, args.seed)
    app = QApplication(sys.argv)
    win = KdTreeWindow(tree)
    win.show()
    sys.exit(app.exec_())
