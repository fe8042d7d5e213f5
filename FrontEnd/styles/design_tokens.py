# Design tokens for the tray timer windows

COLORS = {
    'background': '#F7F9FC',
    'text': '#3C4450',
    'text_strong': '#133A62',
    'bar': '#8FAEC4',
    'bar_edge': '#7B9BB0',
    'bar_today': '#E0674F',
    'grid': '#C9D8E2',
    'footer_bg': '#E7F0FF',
    'footer_text': '#133A62',
    'streak_bg': '#FFE2C2',
}

FONTS = {
    'big_number': 36,
}
