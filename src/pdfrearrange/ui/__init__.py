"""
PdfRearrange - UI Package

GTK4/libadwaita widgets for the editor window.
"""
