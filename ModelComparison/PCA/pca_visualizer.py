import os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
from config import DPI

sns.set_theme(style="whitegrid")


def plot_scree(projection, save_dir):
    """Generate scree plot with individual and cumulative variance."""
    ratios = projection.explained_variance_ratio
    cumulative_variance = projection.cumulative_variance
    positions = range(1, len(ratios) + 1)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 5))

    # Individual variance
    ax1.bar(positions, ratios, alpha=0.7, color='steelblue')
    ax1.set_xlabel('Principal Component', fontsize=11)
    ax1.set_ylabel('Variance Explained Ratio', fontsize=11)
    ax1.set_title('Scree Plot - Individual Variance', fontsize=13, pad=10)
    ax1.grid(alpha=0.3)

    # Cumulative variance
    ax2.plot(positions, cumulative_variance, marker='o', linestyle='-',
             color='darkgreen', linewidth=2, markersize=5)
    ax2.axhline(y=projection.threshold, color='r', linestyle='--',
                label=f'{projection.threshold * 100:.1f}% threshold')
    ax2.axvline(x=projection.n_components, color='orange', linestyle='--',
                label=f'{projection.n_components} components')
    ax2.set_xlabel('Number of Components', fontsize=11)
    ax2.set_ylabel('Cumulative Variance Explained', fontsize=11)
    ax2.set_title('Cumulative Variance Explained', fontsize=13, pad=10)
    ax2.legend()
    ax2.grid(alpha=0.3)
    ax2.set_ylim([0, 1.05])

    plt.tight_layout()
    path = os.path.join(save_dir, "scree_plot.png")
    plt.savefig(path, dpi=DPI, bbox_inches='tight')
    plt.close()
    print("- Scree plot saved")
    return path


def plot_loadings_heatmap(loadings_df, save_dir):
    """Plot heatmap of the loadings of every feature on the kept components."""
    n_features, n_components = loadings_df.shape
    fig_width = max(8, n_components * 1.2)
    fig_height = max(6, n_features * 0.6)

    fig, ax = plt.subplots(figsize=(fig_width, fig_height))

    sns.heatmap(loadings_df, annot=True, fmt=".2f", cmap="coolwarm",
                center=0, cbar_kws={'label': 'Loading'},
                annot_kws={"size": 9}, ax=ax, linewidths=0.5)

    ax.set_title('PCA Loadings', fontsize=14, pad=15)
    ax.set_xlabel('Principal Components', fontsize=12)
    ax.set_ylabel('Features', fontsize=12)
    plt.xticks(rotation=0, fontsize=10)
    plt.yticks(rotation=0, fontsize=10)

    plt.tight_layout()
    path = os.path.join(save_dir, "pca_loadings_heatmap.png")
    plt.savefig(path, dpi=DPI, bbox_inches='tight')
    plt.close()
    print("- PCA loadings heatmap saved")
    return path


def save_pca_results(loadings_df, train_pca, test_pca, save_dir):
    """Save loadings and projected train/test data to CSV."""
    loadings_df.to_csv(os.path.join(save_dir, "pca_loadings.csv"))
    train_pca.to_csv(os.path.join(save_dir, "pca_train.csv"))
    test_pca.to_csv(os.path.join(save_dir, "pca_test.csv"))
    print(f"- Results saved to: {save_dir}")
