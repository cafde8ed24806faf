# gui/style.py
from PyQt5.QtGui import QColor, QPalette
from PyQt5.QtWidgets import QGraphicsDropShadowEffect

# ---- Theme tokens ------------------------------------------------------------
ACCENT        = "#3b82f6"
ACCENT_HOVER  = "#2f6fd8"
DESTRUCTIVE   = "#dc2626"

BG            = "#0b0f14"   # app background
PANEL         = "#11161c"   # sidebar, cards, menus
PANEL_ALT     = "#0f141b"   # inputs, grid
STROKE        = "#1e2430"
STROKE_HOVER  = "#2a3544"
SELECTED      = "#1d3b66"   # selected grid tile

TEXT          = "#e7eef7"
MUTED         = "#9fb5cc"

def _global_qss() -> str:
    return f"""
    QWidget {{
        background: {BG};
        color: {TEXT};
        selection-background-color: {ACCENT};
        selection-color: #ffffff;
    }}
    QFrame, QGroupBox {{ border: none; }}

    QLineEdit {{
        background: {PANEL_ALT};
        border: 1px solid {STROKE};
        border-radius: 8px;
        padding: 7px 10px;
    }}
    QLineEdit:hover {{ border-color: {STROKE_HOVER}; }}
    QLineEdit:focus {{ border-color: {ACCENT}; }}
    QLineEdit[invalid="true"] {{ border-color: {DESTRUCTIVE}; }}

    QPushButton {{
        background: #1b242f;
        border: 1px solid {STROKE};
        border-radius: 8px;
        padding: 7px 12px;
        font-weight: 600;
    }}
    QPushButton:hover {{ background: #202b39; border-color: {STROKE_HOVER}; }}
    QPushButton:disabled {{ color: {MUTED}; background: {PANEL}; border-color: {STROKE}; }}
    QPushButton#primary {{ background: {ACCENT}; border-color: {ACCENT}; color: #ffffff; }}
    QPushButton#primary:hover {{ background: {ACCENT_HOVER}; border-color: {ACCENT_HOVER}; }}
    QPushButton#destructive {{ background: {DESTRUCTIVE}; border-color: {DESTRUCTIVE}; color: #ffffff; }}
    QPushButton#destructive:disabled {{ background: {PANEL}; border-color: {STROKE}; color: {MUTED}; }}
    QPushButton#link {{ background: transparent; border: none; color: {ACCENT}; padding: 2px; }}

    /* Sidebar */
    QFrame#Sidebar {{ background: {PANEL}; border-right: 1px solid {STROKE}; }}
    QPushButton[sidebar="true"] {{
        background: transparent; border: none; text-align: left; padding: 7px 10px; font-weight: 500;
    }}
    QPushButton[sidebar="true"]:hover {{ background: #1a2230; }}
    QPushButton[active="true"] {{ background: {SELECTED}; }}

    /* Breadcrumb */
    QToolButton[crumb="true"] {{ background: transparent; border: none; color: {MUTED}; padding: 2px 4px; }}
    QToolButton[crumb="true"]:hover {{ color: {TEXT}; }}
    QLabel#CrumbSep {{ color: {MUTED}; }}

    /* File grid */
    QListWidget#FileGrid {{ background: {PANEL_ALT}; border: 1px solid {STROKE}; border-radius: 8px; }}
    QListWidget#FileGrid::item {{ border-radius: 8px; padding: 6px; }}
    QListWidget#FileGrid::item:hover {{ background: #1a2230; }}
    QLabel#EmptyState {{ color: {MUTED}; font-size: 14px; }}

    /* Toasts */
    QFrame#Toast {{ background: {PANEL}; border: 1px solid {STROKE_HOVER}; border-radius: 10px; }}
    QFrame#ToastDestructive {{ background: #3b1115; border: 1px solid {DESTRUCTIVE}; border-radius: 10px; }}
    QLabel#ToastTitle {{ background: transparent; font-weight: 600; }}
    QLabel#ToastBody {{ background: transparent; color: {MUTED}; }}

    QMenu {{ background: {PANEL}; color: {TEXT}; border: 1px solid {STROKE}; }}
    QMenu::item {{ padding: 6px 14px; background: transparent; }}
    QMenu::item:selected {{ background: #1a2230; }}

    QScrollBar:vertical {{ background: {PANEL}; width: 10px; margin: 0; }}
    QScrollBar::handle:vertical {{ background: {STROKE}; border-radius: 5px; min-height: 24px; }}
    QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{ height: 0; }}
    """

def apply_app_style(app):
    app.setStyle("Fusion")
    pal = QPalette()
    pal.setColor(QPalette.Window, QColor(BG))
    pal.setColor(QPalette.Base, QColor(PANEL_ALT))
    pal.setColor(QPalette.Button, QColor(PANEL))
    pal.setColor(QPalette.Text, QColor(TEXT))
    pal.setColor(QPalette.WindowText, QColor(TEXT))
    pal.setColor(QPalette.ButtonText, QColor(TEXT))
    pal.setColor(QPalette.Highlight, QColor(SELECTED))
    pal.setColor(QPalette.HighlightedText, QColor(TEXT))
    app.setPalette(pal)
    app.setStyleSheet(_global_qss())

def add_drop_shadow(w, blur=24, dx=0, dy=8, alpha=120):
    eff = QGraphicsDropShadowEffect(w)
    eff.setBlurRadius(blur)
    eff.setOffset(dx, dy)
    eff.setColor(QColor(0, 0, 0, alpha))
    w.setGraphicsEffect(eff)

def repolish(w):
    """Re-evaluate QSS after a dynamic property change."""
    w.style().unpolish(w); w.style().polish(w)
