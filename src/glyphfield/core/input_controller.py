# どこで: `src/glyphfield/core/input_controller.py`。
# 何を: 生のキー入力を Session の状態遷移（文字編集・effect 巡回・密度調整）へ変換する。
# なぜ: ウィンドウ実装（pyglet のキーコード）から状態機械を切り離し、単体で検証できるようにするため。

from __future__ import annotations

import enum

from glyphfield.core.session import Session


class KeyAction(enum.Enum):
    """名前付き特殊キーの意味。"""

    CYCLE_EFFECT = "cycle_effect"
    DELETE = "delete"
    DENSER = "denser"
    SPARSER = "sparser"


# pyglet の key 定数名 → 意味。UP は点を増やす（density を下げる）向き。
KEY_BINDINGS: dict[str, KeyAction] = {
    "ENTER": KeyAction.CYCLE_EFFECT,
    "RETURN": KeyAction.CYCLE_EFFECT,
    "BACKSPACE": KeyAction.DELETE,
    "UP": KeyAction.DENSER,
    "DOWN": KeyAction.SPARSER,
}


class InputController:
    """可視判定付きの入力状態機械。

    各ハンドラは状態を変えたら True を返す。
    操作領域がスクロールで隠れている間は全入力を無視する（状態は保持したまま）。
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def on_text(self, text: str) -> bool:
        """印字可能な 1 文字を末尾へ追加し、点群を作り直す。"""
        session = self.session
        if not session.interactive:
            return False
        if len(text) != 1 or not text.isprintable():
            return False
        if not session.text.append(text):
            return False
        session.regenerate()
        return True

    def on_key(self, action: KeyAction) -> bool:
        """特殊キーを処理する。"""
        session = self.session
        if not session.interactive:
            return False

        if action is KeyAction.CYCLE_EFFECT:
            # effect は描画時の変位だけに効くので点群は作り直さない。
            session.effect.cycle()
            return True
        if action is KeyAction.DELETE:
            changed = session.text.delete_last()
        elif action is KeyAction.DENSER:
            changed = session.effect.adjust_density(-session.settings.density_step)
        elif action is KeyAction.SPARSER:
            changed = session.effect.adjust_density(+session.settings.density_step)
        else:
            return False
        # 空での削除や密度の上下限では点群を作り直さない。
        if changed:
            session.regenerate()
        return changed


__all__ = ["KEY_BINDINGS", "InputController", "KeyAction"]
