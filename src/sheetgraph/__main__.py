from sheetgraph.ui.cli import run

run()
