"""Run the editor with ``python -m pixel_art_editor``"""

from pixel_art_editor.core.pixel_art_window import main

if __name__ == "__main__":
    main()
