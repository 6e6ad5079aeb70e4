"""
どこで: リポジトリ直下 `main.py`。
何を: ログ設定を行い、変形テキストのウィンドウを起動する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging

from glyphfield import run

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    run()
