# flakeproof/cli/__init__.py
