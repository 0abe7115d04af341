"""Chat application: GitHub login gate and room list"""
