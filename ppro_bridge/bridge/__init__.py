"""
File bridge between the tool server and the Premiere Pro CEP panel.
"""
