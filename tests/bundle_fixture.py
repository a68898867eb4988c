"""A miniature cli.js carrying every customization point in its stock shape."""

import json
from pathlib import Path
from typing import Tuple

from cctweak.patches.launch_text import BANNER_TEXT

THEME_SWITCH = (
    'function gT(A){switch(A){case"light":return Lc;case"light-ansi":return La;'
    'case"dark-ansi":return Da;case"light-daltonized":return Ld;'
    'case"dark-daltonized":return Dd;default:return Dc}}'
)
THEME_OPTIONS = (
    '[{label:"Dark mode",value:"dark"},{label:"Light mode",value:"light"},'
    '{label:"Dark mode (colorblind-friendly)",value:"dark-daltonized"}]'
)
THEME_NAMES = (
    'function nT(){return{dark:"Dark mode",light:"Light mode",'
    '"dark-daltonized":"Dark mode (colorblind-friendly)"}}'
)
VERBS_TABLE = 'var kW8={words:["Accomplishing","Actioning","Baking"]};'
VERBS_DISPATCH = 'function Qx(){return Zf("spinner_words_exp",kW8).words}'
FORMAT_BLOCK = (
    "function Sk({spinnerTip:J,overrideMessage:F,verbose:V}){"
    'let L=F,R="x",K=L?L.activeForm+"…":(Z||R)+"…";return K}'
)
GLYPH_FUNCTION = (
    'function sg(){if(process.env.TERM==="xterm-ghostty")'
    'return["·","✢","✳","✶","✻","*"];'
    'return process.platform==="darwin"?["·","✢","✳","✶","✻","✽"]'
    ':["·","✢","*","✶","✻","✽"]}'
)
INTERVAL_CALL = "Xe(()=>{if(!D){I(4);return}I((o)=>o+1)},120)"
WIDTH_PROPS = '{flexWrap:"wrap",height:1,width:2}'
MIRROR_DECL = "let sp=sg(),sm=[...sp,...[...sp].reverse()];"
WELCOME_CALL = (
    'G.createElement(T,null," Welcome to ",'
    'q9.createElement(T,{bold:!0},"Claude Code"),"!")'
)

STOCK_BUNDLE = "\n".join(
    [
        "#!/usr/bin/env node",
        'var meta={VERSION:"1.0.0"};',
        THEME_SWITCH,
        "var opts=" + THEME_OPTIONS + ";",
        THEME_NAMES,
        "var Bn=`" + BANNER_TEXT + "`;",
        WELCOME_CALL + ";",
        VERBS_TABLE,
        VERBS_DISPATCH,
        FORMAT_BLOCK,
        GLYPH_FUNCTION,
        MIRROR_DECL,
        INTERVAL_CALL + ";",
        "G.createElement(Box," + WIDTH_PROPS + ");",
        'console.log("untouched tail");',
        "",
    ]
)

# The theme dispatch rewritten into something no longer recognisable.
BROKEN_THEME_BUNDLE = STOCK_BUNDLE.replace(
    THEME_SWITCH, 'function gT(A){if(A==="light")return Lc;return Dc}'
)


def write_installation(root: Path, content: str = STOCK_BUNDLE, version: str = "1.0.0") -> Tuple[Path, Path]:
    """Lay out ``root`` like an npm package directory."""
    root.mkdir(parents=True, exist_ok=True)
    cli_path = root / "cli.js"
    package_json_path = root / "package.json"
    cli_path.write_text(content, encoding="utf-8")
    package_json_path.write_text(
        json.dumps({"name": "@anthropic-ai/claude-code", "version": version}),
        encoding="utf-8",
    )
    return cli_path, package_json_path
