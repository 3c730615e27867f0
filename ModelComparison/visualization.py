import os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.metrics import ConfusionMatrixDisplay

from config import CLASS_NAMES, CONTINUOUS_COLUMNS, DPI, NOMINAL_COLUMN, PLOT_SUBFOLDERS, TARGET

sns.set_theme(style="whitegrid")


def create_plot_directories(plots_dir):
    for subfolder in PLOT_SUBFOLDERS:
        os.makedirs(os.path.join(plots_dir, subfolder), exist_ok=True)


# Save plot to the selected directory
def save_plot(fig, save_dir, filename):
    path = os.path.join(save_dir, filename)
    fig.savefig(path, dpi=DPI, bbox_inches='tight')
    plt.close(fig)
    print(f"- {filename} saved")
    return path


def _file_safe(name):
    return name.lower().replace(' ', '_').replace('-', '_')


# Class balance, feature distributions per outcome, correlation heatmap
def plot_eda(df, save_dir):
    df_viz = df.copy()
    df_viz['Outcome'] = df_viz[TARGET].map({0: CLASS_NAMES[0], 1: CLASS_NAMES[1]})

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.countplot(x='Outcome', data=df_viz, hue='Outcome', legend=False,
                  palette='Set2', ax=ax)
    ax.set_title('Extinction Outcome Distribution')
    ax.set_xlabel('Outcome')
    ax.set_ylabel('Number of Trials')
    plt.tight_layout()
    save_plot(fig, save_dir, 'status_distribution.png')

    fig, axes = plt.subplots(1, len(CONTINUOUS_COLUMNS), figsize=(5 * len(CONTINUOUS_COLUMNS), 5))
    for ax, col in zip(axes, CONTINUOUS_COLUMNS):
        sns.boxplot(x='Outcome', y=col, hue='Outcome', data=df_viz, legend=False,
                    palette='Set3', showfliers=False, ax=ax)
        ax.set_title(col)
    plt.tight_layout()
    save_plot(fig, save_dir, 'features_by_status.png')

    fig, ax = plt.subplots(figsize=(8, 5))
    rates = df_viz.groupby(NOMINAL_COLUMN, observed=True)[TARGET].mean().sort_values()
    rates.plot.barh(ax=ax, color='steelblue')
    ax.set_title('Success Rate by Fuel')
    ax.set_xlabel('Success Rate')
    plt.tight_layout()
    save_plot(fig, save_dir, 'success_rate_by_fuel.png')

    corr_df = df_viz[CONTINUOUS_COLUMNS + [TARGET]].astype(float)
    fig, ax = plt.subplots(figsize=(8, 7))
    sns.heatmap(corr_df.corr(), cmap='coolwarm', annot=True, fmt=".2f",
                square=True, ax=ax, cbar_kws={"shrink": 0.8})
    ax.set_title('Correlation Heatmap')
    plt.xticks(rotation=45, ha='right')
    plt.yticks(rotation=0)
    plt.tight_layout()
    save_plot(fig, save_dir, 'correlation_heatmap.png')


def plot_roc_curves(records, save_dir):
    """One ROC figure per model plus a combined comparison figure."""
    plotted = [r for r in records if r.roc is not None]

    for record in plotted:
        fpr, tpr, _ = record.roc
        fig, ax = plt.subplots(figsize=(7, 6))
        ax.plot(fpr, tpr, label=f'AUC = {record.auc:.3f}')
        ax.plot([0, 1], [0, 1], 'k--')
        ax.set_title(f'ROC Curve – {record.model_name}', pad=20)
        ax.set_xlabel('False Positive Rate')
        ax.set_ylabel('True Positive Rate')
        ax.legend(loc='lower right')
        plt.tight_layout()
        save_plot(fig, save_dir, f'roc_curve_{_file_safe(record.model_name)}.png')

    if plotted:
        fig, ax = plt.subplots(figsize=(8, 7))
        for record in plotted:
            fpr, tpr, _ = record.roc
            ax.plot(fpr, tpr, label=f'{record.model_name} (AUC = {record.auc:.3f})')
        ax.plot([0, 1], [0, 1], 'k--')
        ax.set_title('ROC Curves – All Models', pad=20)
        ax.set_xlabel('False Positive Rate')
        ax.set_ylabel('True Positive Rate')
        ax.legend(loc='lower right', fontsize=9)
        plt.tight_layout()
        save_plot(fig, save_dir, 'roc_curves_all_models.png')


def plot_confusion_matrices(records, save_dir):
    for record in records:
        if record.confusion is None:
            continue
        disp = ConfusionMatrixDisplay(record.confusion, display_labels=CLASS_NAMES)
        fig, ax = plt.subplots(figsize=(7, 6))
        disp.plot(cmap='Blues', ax=ax, values_format='d')
        ax.set_title(f'Confusion Matrix – {record.model_name}', pad=20)
        plt.tight_layout()
        save_plot(fig, save_dir, f'confusion_matrix_{_file_safe(record.model_name)}.png')


def plot_tuning_curve(model, save_dir):
    """CV accuracy against the searched hyperparameters of one model."""
    trace = model.search_trace
    params = [c for c in trace.columns if c not in ('mean_error', 'std_error', 'mean_accuracy')]
    if not params or len(trace) < 2:
        return None

    fig, ax = plt.subplots(figsize=(8, 5))
    x_param = params[0]
    if len(params) == 1:
        ordered = trace.sort_values(x_param)
        ax.errorbar(ordered[x_param], ordered['mean_accuracy'], yerr=ordered['std_error'],
                    marker='o', capsize=3)
    elif len(params) == 2:
        for value, group in trace.groupby(params[1]):
            ordered = group.sort_values(x_param)
            ax.plot(ordered[x_param], ordered['mean_accuracy'], marker='o',
                    label=f'{params[1]} = {value}')
        ax.legend(fontsize=9)
    else:
        # Many dimensions: best CV accuracy reached for each value of the first one
        best = trace.groupby(x_param)['mean_accuracy'].max()
        ax.plot(best.index, best.values, marker='o')
        ax.set_title(f'{model.name}: best CV accuracy per {x_param}')

    ax.set_xlabel(x_param)
    ax.set_ylabel('CV Accuracy')
    if len(params) <= 2:
        ax.set_title(f'Hyperparameter Tuning – {model.name}')
    plt.tight_layout()
    return save_plot(fig, save_dir, f'tuning_{_file_safe(model.name)}.png')


def plot_tuning_curves(trained_models, save_dir):
    for model in trained_models.values():
        plot_tuning_curve(model, save_dir)
