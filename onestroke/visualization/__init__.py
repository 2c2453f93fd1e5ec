from onestroke.visualization.trace_visualization import generate_trace_visualization
