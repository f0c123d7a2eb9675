from .report import RunRecord, mode_summary, print_summary, results_frame, save_results

__all__ = ['RunRecord', 'mode_summary', 'print_summary', 'results_frame', 'save_results']
