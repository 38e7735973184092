from typing import Optional
import io
import base64
import logging
import warnings

import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from models.common_models import ChartSpec

warnings.filterwarnings("ignore", category=UserWarning)

logger = logging.getLogger(__name__)


def render_chart(spec: ChartSpec) -> Optional[str]:
    """
    Draw a chart spec and return it as a base64 PNG.
    Returns None for empty data, missing keys or an unknown kind.
    """
    df = pd.DataFrame(spec.data)
    if df.empty:
        return None
    if spec.x_key not in df.columns or spec.y_key not in df.columns:
        logger.warning("Chart keys %s/%s not in data", spec.x_key, spec.y_key)
        return None

    df[spec.y_key] = pd.to_numeric(df[spec.y_key], errors="coerce").fillna(0)
    fig, ax = plt.subplots(figsize=(8, 5))

    try:
        if spec.kind == "line":
            sns.lineplot(data=df, x=spec.x_key, y=spec.y_key, ax=ax, marker="o")
            ax.tick_params(axis="x", rotation=45)

        elif spec.kind == "bar":
            df[spec.x_key] = df[spec.x_key].astype(str)
            sns.barplot(data=df, x=spec.x_key, y=spec.y_key, ax=ax)
            ax.tick_params(axis="x", rotation=45)

        elif spec.kind == "pie":
            sizes = df[spec.y_key].clip(lower=0)
            if sizes.sum() == 0:
                return None
            # one colour per slice
            colors = sns.color_palette("husl", len(df))
            ax.pie(sizes, labels=df[spec.x_key].astype(str), colors=colors, autopct="%1.0f%%")
            ax.axis("equal")

        else:
            logger.warning("Unknown chart kind: %s", spec.kind)
            return None

        buffer = io.BytesIO()
        fig.tight_layout()
        fig.savefig(buffer, format="png")
        buffer.seek(0)
        return base64.b64encode(buffer.read()).decode("utf-8")
    finally:
        plt.close(fig)
