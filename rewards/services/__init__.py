"""Reward network services"""
