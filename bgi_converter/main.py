"""Точка входа: без аргументов открывается окно, с аргументами работает консоль."""
from __future__ import annotations

import sys
from typing import List, Optional

from bgi_converter import cli


def main(argv: Optional[List[str]] = None) -> int:
    """Создаёт и запускает главное окно приложения либо передаёт аргументы в консоль."""
    argv = sys.argv[1:] if argv is None else argv
    if argv:
        return cli.main(argv)

    # окно импортируется лениво: консоли tkinter не нужен
    from bgi_converter.app import BgiConverterApp

    app = BgiConverterApp()
    app.mainloop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
