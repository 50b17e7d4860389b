"""Embedded ECMAScript for hover highlighting.

The script mirrors :class:`regviz.highlight.HighlightController`: one
``Highlighter`` object owns the undo list, and a single delegated
``mouseover``/``mouseout`` pair on the document root reads the
``data-r``/``data-c`` tags of whatever element the pointer is over.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from .config import RenderConfig
from .highlight import COLOR_CLASSES

HINT_ELEMENT_ID = "hint"

_SCRIPT = """
(function () {
  var colors = __COLORS__;
  var root = document.documentElement;
  var byId = {};
  (typeof intervals === 'undefined' ? [] : intervals).forEach(function (iv) {
    byId[iv.id] = iv;
  });
  var remap = typeof resolved === 'undefined' ? {} : resolved;

  function label(id) {
    var iv = byId[id];
    if (!iv || iv.value === undefined || iv.value === 'v' || String(iv.value).indexOf('v{') === 0) {
      return 'v' + id;
    }
    return String(iv.value);
  }

  function resolve(id, col) {
    var table = remap[col];
    if (table && table[id] !== undefined) return table[id];
    return id;
  }

  function Highlighter(hint) {
    this.hint = hint;
    this.undo = [];
  }

  Highlighter.prototype.paint = function (className, colorClass) {
    var undo = this.undo;
    var color = colors[colorClass];
    Array.prototype.forEach.call(root.getElementsByClassName(className), function (el) {
      undo.push([el, el.style.fill]);
      el.style.fill = color;
    });
  };

  Highlighter.prototype.clear = function () {
    while (this.undo.length) {
      var entry = this.undo.pop();
      entry[0].style.fill = entry[1];
    }
    this.hint.textContent = ' ';
  };

  Highlighter.prototype.highlight = function (target, colorClass, noclear) {
    var self = this;
    if (!colorClass) colorClass = 'interval';
    if (!noclear) this.clear();
    if (target.r !== undefined) this.paint('r-' + target.r, colorClass);
    if (target.c === undefined) return;
    var col = target.c;
    this.paint('c-' + col, colorClass);
    var instr = instructions[col];
    var text = col + ': ';
    if (!instr) {
      this.hint.textContent = text + 'empty';
      return;
    }
    if (instr.output !== null && instr.output !== undefined) {
      text += label(instr.output) + '=';
      this.highlight({ r: resolve(instr.output, col) }, 'output', true);
    }
    var inputs = instr.inputs || [];
    text += instr.kind + '(' + inputs.map(label).join(', ') + ')';
    inputs.forEach(function (id) {
      self.highlight({ r: resolve(id, col) }, 'input', true);
    });
    var tmps = instr.temporary || [];
    if (tmps.length > 0) {
      text += ' | tmp: ' + tmps.map(label).join(', ');
      tmps.forEach(function (id) {
        self.highlight({ r: resolve(id, col) }, 'tmp', true);
      });
    }
    this.hint.textContent = text;
  };

  function targetOf(el) {
    while (el && el !== root && el.getAttribute) {
      var r = el.getAttribute('data-r');
      var c = el.getAttribute('data-c');
      if (r !== null || c !== null) {
        var target = {};
        if (r !== null) target.r = Number(r);
        if (c !== null) target.c = Number(c);
        return target;
      }
      el = el.parentNode;
    }
    return null;
  }

  var highlighter = new Highlighter(document.getElementById('__HINT__'));
  root.addEventListener('mouseover', function (evt) {
    var target = targetOf(evt.target);
    if (target) highlighter.highlight(target);
  });
  root.addEventListener('mouseout', function () {
    highlighter.clear();
  });
})();
"""


def data_script(name: str, payload: Any) -> str:
    return f"var {name}={json.dumps(payload, separators=(',', ':'))};"


def embedded_instructions(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """The payload's instruction section, keyed by instruction id."""
    section = raw.get("instructions") or {}
    if isinstance(section, Mapping):
        return dict(section)
    return {str(entry.get("id", idx)): entry for idx, entry in enumerate(section)}


def interaction_script(config: RenderConfig) -> str:
    colors = {name: config.color(f"highlight:{name}") for name in COLOR_CLASSES}
    return _SCRIPT.replace("__COLORS__", json.dumps(colors)).replace("__HINT__", HINT_ELEMENT_ID)
