# Design tokens for the StudyCycle window

COLORS = {
    'background': '#F7F9FC',
    'surface': '#E7F0FF',
    'primary': '#5EA1FF',
    'primary_hover': '#4C92F5',
    'text': '#3C4450',
    'text_strong': '#133A62',
    'border': '#DCE3ED',
    'footer_bg': '#E7F0FF',
    'footer_text': '#133A62',
    'pause_dot': '#FFC24B',
}

# accent per cycle phase, keyed by Mode value
MODE_COLORS = {
    'work': '#5EA1FF',
    'break': '#4CC38A',
    'longBreak': '#8E7CF0',
}

MODE_LABELS = {
    'work': 'Focus',
    'break': 'Break',
    'longBreak': 'Long Break',
}

FONTS = {
    'family': 'Inter, Manrope, Arial, sans-serif',
    'timer_size': 96,
    'timer_weight': 'bold',
    'button_size': 18,
    'button_weight': 600,
    'text': 16,
    'text_strong': 22,
}


def stylesheet(mode_value='work'):
    accent = MODE_COLORS.get(mode_value, COLORS['primary'])
    return f"""
    QMainWindow, QWidget {{ background: {COLORS['background']}; color: {COLORS['text']};
        font-family: {FONTS['family']}; font-size: {FONTS['text']}px; }}
    #TimerCard {{ background: {COLORS['surface']}; border-radius: 24px; padding: 32px; }}
    #TimerLabel {{ font-size: {FONTS['timer_size']}px; font-weight: {FONTS['timer_weight']};
        color: {COLORS['text_strong']}; }}
    #PhaseLabel {{ font-size: {FONTS['text_strong']}px; color: {accent}; }}
    #StartBtn {{ background: {accent}; color: white; border-radius: 16px; padding: 8px 32px;
        font-size: {FONTS['button_size']}px; font-weight: {FONTS['button_weight']}; }}
    #EndBtn, #ModeBtn {{ background: {COLORS['background']}; border: 1px solid {COLORS['border']};
        border-radius: 16px; padding: 8px 24px; font-size: {FONTS['button_size']}px; }}
    #ModeBtn:checked {{ background: {accent}; color: white; border: none; }}
    """
