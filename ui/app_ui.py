from __future__ import annotations
from typing import Optional
import gradio as gr
from core.config import AI_DELAY, DEFAULT_DIFFICULTY, MIN_LEVEL, MAX_LEVEL
from .controller import UIController, MODE_LABELS, COLOR_LABELS

def build_app(ai_delay: float = AI_DELAY, seed: Optional[int] = None, theme: str = "wood"):
    ctl = UIController(ai_delay=ai_delay, seed=seed)
    ctl.renderer.set_theme(theme)

    with gr.Blocks(
        title="五子棋人机对战",
        theme=gr.themes.Soft(),
        css="""
        .footer-note {font-size: 12px; color: #666;}
        @media (max-width: 720px){
          .two-col {flex-direction: column;}
        }
        """
    ) as demo:
        gr.Markdown("## 五子棋人机对战（普通模式 / 闯关模式）")

        with gr.Row(elem_classes=["two-col"]):
            # 左侧：棋盘 + 基础操作
            with gr.Column(scale=3):
                canvas = gr.Image(
                    label="棋盘",
                    value=None,
                    interactive=True,
                    type="pil",
                    height=640
                )
                with gr.Row():
                    btn_new = gr.Button("新游戏", variant="primary")
                    btn_restart = gr.Button("重新开始")
                    btn_undo = gr.Button("悔棋")
                    btn_next = gr.Button("下一关", variant="secondary")

            # 右侧：模式与设置
            with gr.Column(scale=2):
                info = gr.Markdown("")
                with gr.Accordion("模式与设置", open=True):
                    mode = gr.Radio(choices=list(MODE_LABELS), value="普通模式", label="游戏模式")
                    color = gr.Radio(choices=list(COLOR_LABELS), value="黑子", label="执子（黑子先行，仅普通模式）")
                    level = gr.Slider(MIN_LEVEL, MAX_LEVEL, value=DEFAULT_DIFFICULTY, step=1,
                                      label="AI 难度（仅普通模式）")
                    theme_dd = gr.Dropdown(choices=["wood", "light"], value=theme, label="主题")
                gr.Markdown(
                    '<div class="footer-note">提示：'
                    '闯关模式共 10 关，难度逐关提升；'
                    '悔棋会同时撤回你和电脑的最后一步。'
                    '</div>'
                )

        # ---------------- 事件绑定 ----------------

        def _out(result):
            img, popup = result
            if popup: gr.Info(popup)
            return img, ctl.info_text()

        def on_click(evt: gr.SelectData):
            img, popup = ctl.click_canvas(evt)
            if popup:
                # 落子被拒用 Warning，对局结果用 Info
                (gr.Info if ctl.move_accepted else gr.Warning)(popup)
            return img, ctl.info_text()

        def on_computer():
            return _out(ctl.computer_turn())

        # 先渲染玩家落子，再让电脑应手
        canvas.select(on_click, outputs=[canvas, info]).then(on_computer, outputs=[canvas, info])

        btn_new.click(lambda: _out(ctl.new_game()), outputs=[canvas, info]).then(
            on_computer, outputs=[canvas, info])
        btn_restart.click(lambda: _out(ctl.restart()), outputs=[canvas, info]).then(
            on_computer, outputs=[canvas, info])
        btn_next.click(lambda: _out(ctl.next_level()), outputs=[canvas, info]).then(
            on_computer, outputs=[canvas, info])

        def on_undo():
            img, popup = ctl.undo()
            if popup: gr.Warning(popup)
            return img, ctl.info_text()
        btn_undo.click(on_undo, outputs=[canvas, info])

        def on_mode(v):
            img, text = _out(ctl.set_mode(v))
            return img, text, ctl.player_color_label(), ctl.session.difficulty
        mode.change(on_mode, inputs=[mode], outputs=[canvas, info, color, level]).then(
            on_computer, outputs=[canvas, info])

        def on_color(v):
            img, popup = ctl.set_player_color(v)
            if popup: gr.Info(popup)
            return img, ctl.info_text()
        color.input(on_color, inputs=[color], outputs=[canvas, info]).then(
            on_computer, outputs=[canvas, info])

        def on_level(v):
            img, popup = ctl.set_difficulty(int(v))
            if popup: gr.Info(popup)
            return img, ctl.info_text()
        level.release(on_level, inputs=[level], outputs=[canvas, info])

        def on_theme(v):
            ctl.renderer.set_theme(v)
            return ctl.get_image()
        theme_dd.change(on_theme, inputs=[theme_dd], outputs=[canvas])

        # 初始默认局面
        def _init():
            return _out(ctl.new_game())
        demo.load(_init, outputs=[canvas, info])

    return demo
