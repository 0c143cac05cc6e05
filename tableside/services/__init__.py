"""Workflow services shared by the API routes"""
