"""CSS styles for the ASA Quick Creator application."""

CSS = """
Screen {
    background: #1e1e2e;
}

Header {
    background: #181825;
    text-style: bold;
    padding: 0 1;
    height: 3;
}

#connection-status {
    background: #181825;
    color: #a6adc8;
    padding: 0 2;
    height: 1;
    text-align: right;
    dock: top;
}

Footer {
    background: #181825;
    height: 2;
}

Button {
    background: transparent;
    color: #3b82f6;
    border: none;
    height: 3;
    min-height: 3;
    min-width: 20;
    padding: 0 1;
    margin: 0;
    content-align: center middle;
}

Button:hover {
    background: #3b82f6;
    color: #ffffff;
    text-style: underline;
}

Button:focus {
    background: #3b82f6;
    color: #ffffff;
    text-style: bold underline reverse;
}

Button.primary {
    background: #22d3ee;
    color: #0f172a;
    border: solid #22d3ee;
    text-style: bold;
}

Horizontal {
    height: auto;
    margin: 0 0 1 0;
}

Horizontal > * {
    height: auto;
}

Vertical, Horizontal {
    padding: 0 1;
}

#content {
    padding: 1 2;
}

#dashboard-title, #asset-title, #result-title {
    text-style: bold;
    color: #67e8f9;
    margin-bottom: 1;
    border-bottom: solid #22d3ee;
    padding-bottom: 0;
}

#dashboard-helper, #asset-subtitle, #wallet-helper {
    color: #94a3b8;
    margin-bottom: 1;
}

#wallet-info {
    padding: 0 1;
    background: #181825;
    border: solid #3b82f6;
    margin: 0 0 1 0;
}

#fee-estimate {
    color: #fbbf24;
    border: solid #3b82f6;
    padding: 0 1;
    margin-bottom: 1;
}

#asset-notes {
    color: #fcd34d;
    border: solid #f59e0b;
    padding: 0 1;
    margin-top: 1;
}

.field-error {
    color: #f87171;
    height: auto;
}

Label {
    color: #e2e8f0;
}

Input {
    background: #181825;
    border: solid #3b82f6;
    color: #e2e8f0;
    padding: 0 1;
    min-height: 1;
}

Static {
    color: #a6adc8;
}

ModalScreen {
    align: center middle;
}

ModalScreen > Vertical, #asset-form {
    border: solid #22d3ee;
    background: #181825;
    padding: 1 2;
    width: 90;
    max-height: 90%;
}

ModalScreen > Vertical {
    height: auto;
}

#tx-hash-display, #asset-id-display {
    background: #181825;
    border: solid #3b82f6;
    padding: 0 1;
    margin: 0 0 1 0;
    color: #e2e8f0;
}
"""
